from . object_model import *
from . errors import *
from . object_store import ObjectLoader, ObjectStore
from . object_serialization import (get_object_id, hash_object, wrap, unwrap, sort_entries, serialize_tree, parse_tree,
                                    tree_to_bytes, blob_to_bytes)
from . tree_builder import DEFAULT_IGNORE, build_tree, write_blob, hash_file
from . inspector import read_object, show_object, list_tree, format_entry
