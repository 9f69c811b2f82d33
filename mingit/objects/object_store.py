import logging
from abc import ABC, abstractmethod
from . import codec
from .object_model import *
from .object_serialization import get_object_id, wrap, unwrap
from .errors import UnknownKindError

logger = logging.getLogger(__name__)

class ObjectLoader(ABC):
    """Interface for loading objects from the object store."""
    @abstractmethod
    def read(self, object_id:ObjectId) -> bytes:
        """Returns the compressed envelope, raises ObjectNotFoundError if the object does not exist."""
        pass

    @abstractmethod
    def contains(self, object_id:ObjectId) -> bool:
        pass

    def load(self, object_id:ObjectId, strict:bool=False) -> Envelope:
        envelope = unwrap(codec.decode(self.read(object_id)), strict=strict)
        logger.debug(f"Loaded {envelope.kind} {object_id} ({envelope.size} bytes)")
        return envelope

class ObjectStore(ObjectLoader, ABC):
    """Interface for persisting objects in the object store."""
    @abstractmethod
    def write(self, object_id:ObjectId, data:bytes) -> None:
        """Persists compressed envelope bytes under their id. Writing an existing id again is allowed."""
        pass

    def store(self, kind:str, payload:bytes) -> ObjectId:
        if kind not in OBJECT_KINDS:
            raise UnknownKindError(kind)
        envelope = wrap(kind, payload)
        object_id = get_object_id(envelope)
        self.write(object_id, codec.encode(envelope))
        logger.debug(f"Stored {kind} {object_id} ({len(payload)} bytes)")
        return object_id
