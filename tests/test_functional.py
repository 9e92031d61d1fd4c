from finance_engine.functional import Maybe, Nothing, Some, first, pipe


def test_maybe_map():
    doubled = Some(5).map(lambda x: x * 2)

    assert doubled.is_some()
    assert doubled.get_or_else(0) == 10
    assert Nothing().map(lambda x: x * 2).get_or_else(0) == 0


def test_map_to_none_becomes_nothing():
    assert Some({"a": 1}).map(lambda d: d.get("b")).is_none()


def test_maybe_bind():
    def safe_divide(x: int) -> Maybe[int]:
        if x == 0:
            return Nothing()
        return Some(10 // x)

    assert Some(2).bind(safe_divide) == Some(5)
    assert Some(0).bind(safe_divide).is_none()
    assert Nothing().bind(safe_divide).is_none()


def test_maybe_of():
    assert Maybe.of(None) == Nothing()
    assert Maybe.of(0) == Some(0)


def test_first():
    assert first([1, 2, 3, 4], lambda x: x > 2) == Some(3)
    assert first([], lambda x: True) == Nothing()


def test_pipe():
    inc = lambda x: x + 1
    dbl = lambda x: x * 2

    assert pipe(5, inc, dbl) == 12
