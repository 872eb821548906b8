import pytest

from fiatutil.ec_args import ArgumentRegistry, executable_path


def test_executable_path_stable():
    path = executable_path()
    assert path
    assert executable_path() == path


def test_unregistered_defaults():
    reg = ArgumentRegistry(environ={})
    assert reg.argc() == 0
    assert reg.argv() == (executable_path(),)
    assert reg.getarg(0) == executable_path()


def test_register_basic():
    reg = ArgumentRegistry(environ={})
    reg.register(["prog", "a", "b"])
    assert reg.argc() == 3
    assert reg.argv() == ("prog", "a", "b")
    assert reg.getarg(0) == "prog"
    assert reg.getarg(2) == "b"


def test_register_stops_at_default_terminator():
    reg = ArgumentRegistry(environ={})
    reg.register(["prog", "a", "-^", "b"])
    assert reg.argc() == 2
    assert reg.argv() == ("prog", "a")


def test_register_stops_at_none():
    reg = ArgumentRegistry(environ={})
    reg.register(["prog", None, "b"])
    assert reg.argc() == 1


def test_register_env_terminator():
    reg = ArgumentRegistry(environ={"MPL_CL_TERMINATE": "--stop"})
    reg.register(["prog", "x", "-^", "--stop", "y"])
    assert reg.argv() == ("prog", "x", "-^")


def test_register_only_first_counts():
    reg = ArgumentRegistry(environ={})
    reg.register(["prog", "a"])
    reg.register(["other", "b", "c"])
    assert reg.argv() == ("prog", "a")


def test_register_empty_is_ignored():
    reg = ArgumentRegistry(environ={})
    reg.register([])
    reg.register(["prog", "z"])
    assert reg.argc() == 2


def test_register_terminator_first_uses_executable():
    reg = ArgumentRegistry(environ={})
    reg.register(["-^", "a"])
    assert reg.argc() == 1
    assert reg.getarg(0) == executable_path()
    assert reg.argv() == (executable_path(),)


@pytest.mark.parametrize("argno", [-1, 3, 10])
def test_getarg_out_of_range(argno):
    reg = ArgumentRegistry(environ={})
    reg.register(["prog", "a", "b"])
    assert reg.getarg(argno) == ""


def test_putarg_replaces():
    reg = ArgumentRegistry(environ={})
    reg.register(["prog", "a", "b"])
    reg.putarg(1, "changed")
    assert reg.getarg(1) == "changed"
    assert reg.argv() == ("prog", "changed", "b")


def test_putarg_out_of_range():
    reg = ArgumentRegistry(environ={})
    reg.register(["prog", "a"])
    with pytest.raises(IndexError):
        reg.putarg(2, "x")
    with pytest.raises(IndexError):
        reg.putarg(-1, "x")


def test_putarg_before_register_fails():
    reg = ArgumentRegistry(environ={})
    with pytest.raises(IndexError):
        reg.putarg(0, "x")


def test_reset_then_fill():
    reg = ArgumentRegistry(environ={})
    reg.register(["prog", "a"])
    reg.reset(2, "--")
    assert reg.argc() == 3
    assert reg.getarg(1) == ""
    assert reg.argv() == ()
    reg.putarg(0, "name")
    reg.putarg(1, "first")
    assert reg.argv() == ("name", "first")
    assert reg.getarg(0) == "prog"


def test_reset_negative_counts_as_zero():
    reg = ArgumentRegistry(environ={})
    reg.reset(-3)
    assert reg.argc() == 1


def test_reset_blocks_later_register():
    reg = ArgumentRegistry(environ={})
    reg.reset(1)
    reg.register(["prog", "a", "b"])
    assert reg.argc() == 2
    assert reg.getarg(1) == ""