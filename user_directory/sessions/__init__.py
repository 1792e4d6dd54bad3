from .authority import SessionAuthority, SessionEntry

__all__ = ["SessionAuthority", "SessionEntry"]
