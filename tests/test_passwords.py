from syncroom.auth.passwords import hash_password, verify_password


def test_empty_password_hashes_to_empty_bytes():
    assert hash_password("") == b""


def test_hash_is_salted_and_verifies():
    first = hash_password("hunter2")
    second = hash_password("hunter2")
    assert first != second
    assert verify_password(first, "hunter2")
    assert verify_password(second, "hunter2")


def test_wrong_password_does_not_verify():
    hashed = hash_password("hunter2")
    assert not verify_password(hashed, "hunter3")
    assert not verify_password(hashed, "")


def test_empty_hash_only_matches_no_password():
    assert verify_password(b"", "")
    assert not verify_password(b"", "anything")


def test_garbage_hash_is_rejected():
    assert not verify_password(b"not-a-bcrypt-hash", "hunter2")
