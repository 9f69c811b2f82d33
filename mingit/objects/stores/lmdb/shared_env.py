import logging
import os
import lmdb

logger = logging.getLogger(__name__)

_OBJECT_DB = b'obj'
_MB = 1024*1024
_INITIAL_MAP_SIZE = 10*_MB
#maps above this size grow more slowly
_LARGE_MAP_SIZE = 1024*_MB

class SharedEnvironment:
    """An LMDB environment in a directory, with one named database holding the objects."""
    def __init__(self, store_path:str, writemap:bool=False):
        self.store_path = store_path
        os.makedirs(self.store_path, exist_ok=True)
        self.env = lmdb.Environment(
            store_path,
            max_dbs=1,
            # with writemap, the data file can take the whole map size on disk
            writemap=writemap,
            metasync=False,
            # an existing, larger map keeps its size
            map_size=_INITIAL_MAP_SIZE,
            )
        self._object_db = self.env.open_db(_OBJECT_DB)

    def get_env(self) -> lmdb.Environment:
        return self.env

    def begin_object_txn(self, write=True, buffers=False) -> lmdb.Transaction:
        return self.env.begin(db=self._object_db, write=write, buffers=buffers)

    def close(self) -> None:
        self.env.close()

    def _resize(self) -> int:
        """Grows the memory map and returns the new size in bytes."""
        old_size = self.env.info()['map_size']
        growth = 1.5 if old_size > _LARGE_MAP_SIZE else 3.0
        new_size = int(old_size * growth)
        logger.warning(f"Growing LMDB map of '{self.store_path}' from {old_size // _MB} MB to {new_size // _MB} MB")
        self.env.set_mapsize(new_size)
        return new_size
