from .address_parser import AddressTriple, find, find_batch
from .address_tools import expand_alias, expand_verp, final, is_included, is_mailer_daemon
from .email_address import EmailAddress, rise

__all__ = [
    'AddressTriple',
    'EmailAddress',
    'expand_alias',
    'expand_verp',
    'final',
    'find',
    'find_batch',
    'is_included',
    'is_mailer_daemon',
    'rise',
]
