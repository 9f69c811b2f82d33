from .object_model import *
from .object_store import ObjectLoader
from .object_serialization import parse_tree
from .errors import UnexpectedKindError

# Read-side helpers: fetch an object and present its payload or tree entries.

def read_object(loader:ObjectLoader, object_id:ObjectId, strict:bool=False) -> Envelope:
    return loader.load(ObjectId.validate(object_id), strict=strict)

def show_object(loader:ObjectLoader, object_id:ObjectId, strict:bool=False) -> bytes:
    """Returns the payload of any object, without its header."""
    return read_object(loader, object_id, strict=strict).payload

def list_tree(loader:ObjectLoader, tree_id:ObjectId, strict:bool=False) -> Tree:
    """Returns the entries of a tree object in stored order, which is the canonical order.

    Raises UnexpectedKindError if the object is not a tree.
    """
    envelope = read_object(loader, tree_id, strict=strict)
    if envelope.kind != TREE:
        raise UnexpectedKindError(TREE, envelope.kind)
    return parse_tree(envelope.payload)

def format_entry(entry:TreeEntry, name_only:bool=False) -> str:
    if name_only:
        return entry.name
    return f"{entry.mode} {entry.name} {entry.object_id}"
