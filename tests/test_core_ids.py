from duplexipc.core.ids import unique_id


def test_unique_id_is_hex_token():
    value = unique_id()
    assert isinstance(value, str)
    assert len(value) == 32
    int(value, 16)


def test_unique_id_does_not_repeat():
    ids = {unique_id() for _ in range(10_000)}
    assert len(ids) == 10_000
