import time

import pytest

from doutil.timeout import run_with_timeout


def test_normal():
    assert run_with_timeout(2, 1, str) == ("1", True)


def test_finishes_before_timeout():
    def slow(p):
        time.sleep(0.2)
        return str(p)

    begin = time.monotonic()
    assert run_with_timeout(1, 1, slow) == ("1", True)
    used = time.monotonic() - begin
    assert 0.2 <= used < 0.6


def test_times_out():
    def slower(p):
        time.sleep(1)
        return str(p)

    begin = time.monotonic()
    assert run_with_timeout(0.3, 1, slower) == (None, False)
    used = time.monotonic() - begin
    assert 0.3 <= used < 0.8


def test_exception_is_raised():
    def boom(p):
        raise KeyError(p)

    with pytest.raises(KeyError):
        run_with_timeout(1, "x", boom)