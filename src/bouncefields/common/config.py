import logging
import os
from glob import glob
from typing import List

DEFAULT_MAX_LEN = 512


class Config:
    def __init__(self, args):
        # Extractor selection
        self.kind = args.kind
        self.hint = args.hint or ""

        # Input configurations
        self.texts = list(args.texts or [])
        self.input_files = Config.__prepare_input_files(args.input_files or [])
        self.max_len = args.max_len if args.max_len and args.max_len > 0 else DEFAULT_MAX_LEN

        # Logging
        self.log_level = Config.__prepare_log_level(args.log_level)

    @staticmethod
    def __prepare_input_files(input_files: List[str]):
        file_names = []
        for f in input_files:
            file_names += glob(f)
        file_names = set(file_names)
        return sorted(file for file in file_names if os.path.isfile(file))

    @staticmethod
    def __prepare_log_level(name: str) -> int:
        level = logging.getLevelName((name or "WARNING").upper())
        return level if isinstance(level, int) else logging.WARNING
