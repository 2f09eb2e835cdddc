"""
Shared extension instances, created here to avoid circular imports.
"""

from flask_login import LoginManager
from flask_session import Session
from flask_wtf.csrf import CSRFProtect

from storage import MemStorage

login_manager = LoginManager()
csrf = CSRFProtect()
server_session = Session()

# The single process-wide data store behind every API route
storage = MemStorage()
