import os
import random
import pytest
from mingit.objects import *

# random test data
def get_random_object_id() -> ObjectId:
    return ObjectId.from_digest(os.urandom(20))

def get_random_tree() -> Tree:
    modes = [MODE_TREE, MODE_FILE, MODE_EXECUTABLE, MODE_SYMLINK]
    return [TreeEntry(random.choice(modes), f"entry-{i}", get_random_object_id()) for i in range(100)]

#============================================================
# Envelope
#============================================================
def test_wrap_blob():
    assert wrap(BLOB, b"abcd") == b"blob 4\x00abcd"

def test_hash_object_matches_git():
    assert hash_object(BLOB, b"abcd") == "85df50785d62d3b05ab03d9cbf7e4a0b49449730"
    assert hash_object(BLOB, b"") == "e69de29bb2d1d6434b8b29ae775ad8c2e48c5391"
    assert hash_object(TREE, b"") == "4b825dc642cb6eb9a060e54bf8d69288fbee4904"

def test_unwrap_round_trip():
    for kind in OBJECT_KINDS:
        for payload in [b"", b"abcd", b"\x00\x00 \x00", os.urandom(1024)]:
            assert unwrap(wrap(kind, payload)) == (kind, len(payload), payload)

def test_unwrap_missing_header():
    with pytest.raises(MissingHeaderError):
        unwrap(b"blob 4abcd")

def test_unwrap_no_space():
    with pytest.raises(MalformedHeaderError):
        unwrap(b"blob4\x00abcd")

def test_unwrap_bad_size():
    with pytest.raises(MalformedHeaderError):
        unwrap(b"blob four\x00abcd")
    with pytest.raises(MalformedHeaderError):
        unwrap(b"blob -4\x00abcd")
    with pytest.raises(MalformedHeaderError):
        unwrap(b"blob \x00abcd")

def test_unwrap_unknown_kind():
    with pytest.raises(UnknownKindError) as exc_info:
        unwrap(b"commit 4\x00abcd")
    assert exc_info.value.kind == "commit"

def test_unwrap_size_is_not_checked_by_default():
    envelope = unwrap(b"blob 10\x00abcd")
    assert envelope.size == 10
    assert envelope.payload == b"abcd"

def test_unwrap_strict_checks_size():
    with pytest.raises(MalformedHeaderError):
        unwrap(b"blob 10\x00abcd", strict=True)
    assert unwrap(b"blob 4\x00abcd", strict=True).payload == b"abcd"

def test_format_errors_share_a_base():
    for data in [b"no header", b"blob4\x00", b"tag 1\x00x"]:
        with pytest.raises(FormatError):
            unwrap(data)

#============================================================
# Trees
#============================================================
def test_serialize_scenario():
    d1 = hash_object(BLOB, b"hello\n")
    d2 = get_random_object_id()
    entries = [TreeEntry(MODE_FILE, "file1", d1), TreeEntry(MODE_TREE, "dir1", d2)]
    payload = serialize_tree(sort_entries(entries))
    assert payload == b"40000 dir1\x00" + d2.raw + b"100644 file1\x00" + d1.raw

def test_sort_entries_is_bytewise():
    object_id = get_random_object_id()
    names = ["b", "a.txt", "a", "B", "a-b", "ä", "z"]
    entries = [TreeEntry(MODE_FILE, name, object_id) for name in names]
    assert [e.name for e in sort_entries(entries)] == ["B", "a", "a-b", "a.txt", "b", "z", "ä"]

def test_tree_round_trip_independent_of_input_order():
    entries = get_random_tree()
    shuffled = list(entries)
    random.shuffle(shuffled)
    parsed = parse_tree(serialize_tree(sort_entries(shuffled)))
    assert parsed == sort_entries(entries)
    assert serialize_tree(sort_entries(shuffled)) == serialize_tree(sort_entries(entries))

def test_parse_digest_with_separator_bytes():
    # digests can contain NUL and space bytes, the parser must not stop at them
    tricky = ObjectId.from_digest(b"\x00 \x00 " + b"\xff" * 12 + b"\x00\x00\x20\x00")
    entries = [TreeEntry(MODE_FILE, "a", tricky), TreeEntry(MODE_TREE, "b", tricky)]
    assert parse_tree(serialize_tree(entries)) == entries

def test_parse_empty_tree():
    assert parse_tree(b"") == []

def test_parse_truncated_digest():
    payload = serialize_tree([TreeEntry(MODE_FILE, "a", get_random_object_id())])
    with pytest.raises(TruncatedTreeError):
        parse_tree(payload[:-1])

def test_parse_truncated_name():
    with pytest.raises(TruncatedTreeError):
        parse_tree(b"100644 file-without-nul")

def test_parse_truncated_mode():
    with pytest.raises(TruncatedTreeError):
        parse_tree(b"100644")

def test_parse_invalid_utf8_name():
    payload = b"100644 \xff\xfe\x00" + os.urandom(20)
    with pytest.raises(InvalidTreeEncodingError):
        parse_tree(payload)

def test_tree_parse_errors_share_a_base():
    with pytest.raises(TreeParseError):
        parse_tree(b"40000 dir\x00short")

def test_serialize_rejects_bad_names():
    object_id = get_random_object_id()
    for name in ["", "a/b", "a\x00b"]:
        with pytest.raises(ValueError):
            serialize_tree([TreeEntry(MODE_FILE, name, object_id)])

def test_serialize_rejects_unknown_mode():
    with pytest.raises(ValueError):
        serialize_tree([TreeEntry("160000", "submodule", get_random_object_id())])

def test_tree_to_bytes_sorts_and_wraps():
    object_id = get_random_object_id()
    b = tree_to_bytes([TreeEntry(MODE_FILE, "b", object_id), TreeEntry(MODE_FILE, "a", object_id)])
    envelope = unwrap(b, strict=True)
    assert envelope.kind == TREE
    assert [e.name for e in parse_tree(envelope.payload)] == ["a", "b"]

def test_blob_to_bytes():
    assert blob_to_bytes(b"abcd") == b"blob 4\x00abcd"
