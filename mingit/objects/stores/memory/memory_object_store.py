from mingit.objects.object_model import *
from mingit.objects.object_store import ObjectStore
from mingit.objects.errors import ObjectNotFoundError

class MemoryObjectStore(ObjectStore):
    #no locking needed here, because all the dict operations used here are atomic
    _store:dict[ObjectId, bytes]

    def __init__(self):
        super().__init__()
        self._store = {}

    def contains(self, object_id:ObjectId) -> bool:
        return ObjectId.validate(object_id) in self._store

    def write(self, object_id:ObjectId, data:bytes) -> None:
        self._store[ObjectId.validate(object_id)] = bytes(data)

    def read(self, object_id:ObjectId) -> bytes:
        data = self._store.get(ObjectId.validate(object_id))
        if data is None:
            raise ObjectNotFoundError(f"Object '{object_id}' not found in memory store.", object_id)
        return data
