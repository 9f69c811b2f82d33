import logging
import os
import stat
from .object_model import *
from .object_store import ObjectStore
from .object_serialization import hash_object, sort_entries, serialize_tree
from .errors import BuildError

logger = logging.getLogger(__name__)

# Turns files and directories of the working tree into blob and tree objects.
# There is no staging area: every file below the root is part of the tree.

DEFAULT_IGNORE = ['.git']

def hash_file(store:ObjectStore|None, file_path:str, write:bool=True) -> ObjectId:
    """Returns the blob id of a file's contents. Stores the blob only if write is set."""
    data = _read_bytes(file_path)
    if not write:
        return hash_object(BLOB, data)
    if store is None:
        raise ValueError("A store is needed to write the blob.")
    return store.store(BLOB, data)

def write_blob(store:ObjectStore, path:str) -> tuple[str, ObjectId]:
    """Stores a symlink, executable, or regular file as a blob and returns its tree entry mode and id."""
    try:
        st = os.lstat(path)
    except OSError as e:
        raise BuildError(f"Could not stat '{path}': {e}", path) from e
    if stat.S_ISLNK(st.st_mode):
        # the blob of a link is its target, the link is never followed
        try:
            target = os.readlink(path)
        except OSError as e:
            raise BuildError(f"Could not read link '{path}': {e}", path) from e
        return MODE_SYMLINK, store.store(BLOB, os.fsencode(target))
    if not stat.S_ISREG(st.st_mode):
        raise BuildError(f"'{path}' is neither a regular file nor a symbolic link.", path)
    mode = MODE_EXECUTABLE if st.st_mode & stat.S_IXUSR else MODE_FILE
    return mode, store.store(BLOB, _read_bytes(path))

def build_tree(store:ObjectStore, dir_path:str, ignore:list[str]|None=None, exclude_paths:set[str]|None=None) -> ObjectId:
    """Stores the directory at dir_path, recursively, as a tree object and returns the tree's id.

    Entries whose name is in ignore (by default: DEFAULT_IGNORE) are left out at every level.
    Directories whose real path is in exclude_paths are left out too, e.g. a metadata directory
    that lives inside the work tree under another name.
    Sub directories become sub trees, even if they are empty. Special files like fifos or sockets
    are skipped.
    If reading the working tree fails half way, the objects already stored remain in the store.
    """
    if ignore is None:
        ignore = DEFAULT_IGNORE
    if exclude_paths is None:
        exclude_paths = set()
    logger.debug(f"Building tree for '{dir_path}'")
    try:
        with os.scandir(dir_path) as it:
            dir_entries = list(it)
    except OSError as e:
        raise BuildError(f"Could not list directory '{dir_path}': {e}", dir_path) from e

    entries = []
    for dir_entry in dir_entries:
        if dir_entry.name in ignore:
            continue
        try:
            is_link = dir_entry.is_symlink()
            is_dir = not is_link and dir_entry.is_dir(follow_symlinks=False)
            is_file = not is_link and dir_entry.is_file(follow_symlinks=False)
        except OSError as e:
            raise BuildError(f"Could not stat '{dir_entry.path}': {e}", dir_entry.path) from e
        if is_dir and os.path.realpath(dir_entry.path) in exclude_paths:
            logger.debug(f"Excluding '{dir_entry.path}'")
            continue
        if is_dir:
            entries.append(TreeEntry(MODE_TREE, dir_entry.name, build_tree(store, dir_entry.path, ignore, exclude_paths)))
        elif is_link or is_file:
            mode, object_id = write_blob(store, dir_entry.path)
            entries.append(TreeEntry(mode, dir_entry.name, object_id))
        else:
            logger.warning(f"Skipping '{dir_entry.path}': not a regular file, directory, or symbolic link.")

    tree_id = store.store(TREE, serialize_tree(sort_entries(entries)))
    logger.debug(f"Built tree {tree_id} for '{dir_path}' with {len(entries)} entries")
    return tree_id

def _read_bytes(file_path:str) -> bytes:
    try:
        with open(file_path, 'rb') as f:
            return f.read()
    except OSError as e:
        raise BuildError(f"Could not read file '{file_path}': {e}", file_path) from e
