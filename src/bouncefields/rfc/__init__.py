from .address_syntax import is_comment, is_email_address, is_quoted_address
from .date_normalizer import normalize_date
from .hostname import is_domain_literal, is_internet_host
from .received import ReceivedTokens, parse_received

__all__ = [
    'ReceivedTokens',
    'is_comment',
    'is_domain_literal',
    'is_email_address',
    'is_internet_host',
    'is_quoted_address',
    'normalize_date',
    'parse_received',
]
