import logging
import os
import tempfile
from functools import lru_cache
from mingit.objects.object_model import *
from mingit.objects.object_store import ObjectStore
from mingit.objects.errors import ObjectIoError, ObjectNotFoundError, ObjectPermissionError

logger = logging.getLogger(__name__)

class FileObjectStore(ObjectStore):
    """Loose object files under '{store_path}/objects/{id[:2]}/{id[2:]}', each holding one compressed envelope."""

    def __init__(self, store_path:str):
        super().__init__()
        self.store_path = store_path
        self.object_path = os.path.join(store_path, 'objects')

    def path_for(self, object_id:ObjectId) -> str:
        object_id = ObjectId.validate(object_id)
        return os.path.join(self.object_path, object_id.fanout, object_id.rest)

    def contains(self, object_id:ObjectId) -> bool:
        return os.path.isfile(self.path_for(object_id))

    def write(self, object_id:ObjectId, data:bytes) -> None:
        object_path = self.path_for(object_id)
        dir_path = os.path.dirname(object_path)
        try:
            # another process may create the same fan-out directory concurrently, exist_ok covers that
            os.makedirs(dir_path, exist_ok=True)
            #write to a temp file in the same directory and rename it into place,
            # so that a reader never sees a partially written object
            fd, tmp_path = tempfile.mkstemp(dir=dir_path, prefix='tmp_obj_')
            try:
                with os.fdopen(fd, 'wb') as f:
                    f.write(data)
                # object files are never modified once written
                os.chmod(tmp_path, 0o444)
                os.replace(tmp_path, object_path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise
        except OSError as e:
            raise _io_error(e, object_id, object_path, "write") from e
        logger.debug(f"Wrote {len(data)} bytes to {object_path}")

    @lru_cache(maxsize=1024)  # noqa: B019
    def read(self, object_id:ObjectId) -> bytes:
        object_path = self.path_for(object_id)
        try:
            with open(object_path, 'rb') as f:
                return f.read()
        except OSError as e:
            raise _io_error(e, object_id, object_path, "read") from e

def _io_error(error:OSError, object_id:ObjectId, object_path:str, action:str) -> ObjectIoError:
    if isinstance(error, FileNotFoundError):
        return ObjectNotFoundError(f"Object '{object_id}' not found at '{object_path}'.", object_id, object_path)
    if isinstance(error, PermissionError):
        return ObjectPermissionError(f"Permission denied to {action} object '{object_id}' at '{object_path}'.", object_id, object_path)
    return ObjectIoError(f"Could not {action} object '{object_id}' at '{object_path}': {error}", object_id, object_path)
