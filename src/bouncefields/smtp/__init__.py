from . import command, reply, status

__all__ = ['command', 'reply', 'status']
