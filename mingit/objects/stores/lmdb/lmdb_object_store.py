import logging
import lmdb
from mingit.objects.object_model import *
from mingit.objects.object_store import ObjectStore
from mingit.objects.errors import ObjectIoError, ObjectNotFoundError
from . shared_env import SharedEnvironment

logger = logging.getLogger(__name__)

#bound on how often a single write may grow the map
_MAX_RESIZES = 20

class LmdbObjectStore(ObjectStore):
    """Keeps the compressed envelopes in a single LMDB database, keyed by the raw 20 byte digest."""
    def __init__(self, shared_env:SharedEnvironment):
        super().__init__()
        if(not isinstance(shared_env, SharedEnvironment)):
            raise TypeError(f"shared_env must be of type SharedEnvironment, not '{type(shared_env)}'.")
        self._shared_env = shared_env

    def contains(self, object_id:ObjectId) -> bool:
        key = ObjectId.validate(object_id).raw
        with self._shared_env.begin_object_txn(write=False) as txn:
            return txn.get(key, default=None) is not None

    def write(self, object_id:ObjectId, data:bytes) -> None:
        key = ObjectId.validate(object_id).raw
        resizes = 0
        while True:
            try:
                self._put(key, data)
                return
            except lmdb.MapFullError as e:
                if resizes >= _MAX_RESIZES:
                    raise ObjectIoError(f"Could not write object '{object_id}' to lmdb: map still full after {resizes} resizes",
                                        object_id, self._shared_env.store_path) from e
                logger.warning(f"LMDB map is full while storing object {object_id}")
                try:
                    self._shared_env._resize()
                except lmdb.Error as resize_error:
                    raise ObjectIoError(f"Could not grow lmdb map for object '{object_id}': {resize_error}",
                                        object_id, self._shared_env.store_path) from resize_error
                resizes += 1
            except lmdb.Error as e:
                raise ObjectIoError(f"Could not write object '{object_id}' to lmdb: {e}", object_id, self._shared_env.store_path) from e

    def _put(self, key:bytes, data:bytes) -> None:
        # the same id always holds the same bytes, so an existing key is left alone
        with self._shared_env.begin_object_txn() as txn:
            txn.put(key, data, overwrite=False)

    def read(self, object_id:ObjectId) -> bytes:
        key = ObjectId.validate(object_id).raw
        try:
            with self._shared_env.begin_object_txn(write=False) as txn:
                data = txn.get(key, default=None)
        except lmdb.Error as e:
            raise ObjectIoError(f"Could not read object '{object_id}' from lmdb: {e}", object_id, self._shared_env.store_path) from e
        if data is None:
            raise ObjectNotFoundError(f"Object '{object_id}' not found in lmdb store '{self._shared_env.store_path}'.",
                                      object_id, self._shared_env.store_path)
        return bytes(data)
