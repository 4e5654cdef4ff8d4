__version__ = "0.1.0"

from .adapters import MemoryDocumentStore, document_store_from_config
from .config import Config
from .core.conventions import Conventions
from .core.keys import derive_login_key, derive_user_key
from .core.serializer import register_schema
from .core.user import (
    Claim,
    IdentityUser,
    IdentityUserClaim,
    IdentityUserLogin,
    UserLoginInfo,
)
from .core.user_store import UserStore
from .utils import get_version

__all__ = [
    "Claim",
    "Config",
    "Conventions",
    "derive_login_key",
    "derive_user_key",
    "document_store_from_config",
    "get_version",
    "IdentityUser",
    "IdentityUserClaim",
    "IdentityUserLogin",
    "MemoryDocumentStore",
    "register_schema",
    "UserLoginInfo",
    "UserStore",
]
