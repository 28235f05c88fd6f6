# Auth package
from .session_store import SessionStore
from .session_manager import SessionManager, SessionMode

__all__ = ['SessionStore', 'SessionManager', 'SessionMode']
