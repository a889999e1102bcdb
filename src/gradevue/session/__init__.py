from gradevue.session import session
from gradevue.session import store

from gradevue.session.session import (GradeSession, SessionState,)
from gradevue.session.store import (PersistedSession, SessionStore,)

__all__ = ['GradeSession', 'PersistedSession', 'SessionState', 'SessionStore',
           'session', 'store']
