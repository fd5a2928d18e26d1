import argparse
import json
import logging
import sys
from dataclasses import asdict
from typing import Callable, Dict, Iterator

from bouncefields.address import find as find_address
from bouncefields.address import rise
from bouncefields.common.config import DEFAULT_MAX_LEN, Config
from bouncefields.rfc.date_normalizer import normalize_date
from bouncefields.rfc.hostname import find as find_host
from bouncefields.rfc.received import parse_received
from bouncefields.smtp import command, reply, status

logger = logging.getLogger(__name__)


def _address(text: str, hint: str):
    email = rise(find_address(text))
    return asdict(email) if email else None


def _received(text: str, hint: str):
    # "from_" -> "from"
    return {k.rstrip("_"): v for k, v in parse_received(text)._asdict().items()}


EXTRACTORS: Dict[str, Callable[[str, str], object]] = {
    "address": _address,
    "host": lambda text, hint: find_host(text),
    "date": lambda text, hint: normalize_date(text),
    "received": _received,
    "command": lambda text, hint: command.find(text),
    "reply": lambda text, hint: reply.find(text, hint),
    "status": lambda text, hint: status.find(text, hint),
}


def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(prog="bouncefields",
                                     description="""Extract addresses, hostnames, dates, Received tokens and SMTP codes from bounce text.""",
                                     formatter_class=lambda prog: argparse.HelpFormatter(prog, max_help_position=80))

    parser.add_argument('kind', choices=sorted(EXTRACTORS),
                        help='Field to extract from each input line.')

    parser.add_argument('texts', metavar='text', nargs='*',
                        help='Text to read. Standard input is read when no text or file is given.')

    parser.add_argument('-i', '--input', metavar='<file>', dest="input_files",
                        nargs='+', type=str, required=False, default=[],
                        help='Files to read, one field per line. Wildcards are expanded.')

    parser.add_argument('--hint', metavar='<code>', dest="hint",
                        type=str, required=False, default='',
                        help='SMTP reply code or its class (2, 4, 5) for the reply and status finders.')

    parser.add_argument('--max-len', metavar='N', dest="max_len",
                        type=int, required=False, default=DEFAULT_MAX_LEN,
                        help=f'Truncate every input line to N characters. (default={DEFAULT_MAX_LEN})')

    parser.add_argument('--log-level', metavar='<level>', dest="log_level",
                        type=str, required=False, default='WARNING',
                        help='DEBUG, INFO, WARNING or ERROR. (default=WARNING)')

    return parser.parse_args(argv)


def _read_lines(config: Config) -> Iterator[str]:
    yield from config.texts
    for f in config.input_files:
        logger.info("Reading %s", f)
        with open(f, encoding="utf-8", errors="replace") as fh:
            for line in fh:
                yield line.rstrip("\r\n")
    if not config.texts and not config.input_files and not sys.stdin.isatty():
        for line in sys.stdin:
            yield line.rstrip("\r\n")


def main(argv=None) -> int:
    # Config object stores all arguments parsed
    config = Config(parse_arguments(argv))
    logging.basicConfig(level=config.log_level, format="%(levelname)s %(name)s: %(message)s")

    extract = EXTRACTORS[config.kind]
    count = 0
    for line in _read_lines(config):
        text = line[:config.max_len]
        result = extract(text, config.hint)
        print(json.dumps({"input": text, config.kind: result}, ensure_ascii=False))
        count += 1

    if count == 0:
        logger.error("No input text was given")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
