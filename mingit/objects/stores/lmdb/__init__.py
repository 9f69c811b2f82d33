from . shared_env import SharedEnvironment
from . lmdb_object_store import LmdbObjectStore
__all__ = ['SharedEnvironment', 'LmdbObjectStore']
