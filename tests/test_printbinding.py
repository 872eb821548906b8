import socket

import pytest

from fiatutil.printbinding import collect_binding, format_binding, format_cores, main


def test_format_cores_single_run():
    assert format_cores([0, 1, 2, 3]) == "0-3"


def test_format_cores_pair_is_a_range():
    assert format_cores([0, 1]) == "0-1"


def test_format_cores_isolated():
    assert format_cores([0, 2, 4]) == "0,2,4"


def test_format_cores_mixed():
    assert format_cores([0, 1, 2, 5, 7, 8]) == "0-2,5,7-8"


def test_format_cores_single():
    assert format_cores([5]) == "5"


def test_format_cores_empty():
    assert format_cores([]) == "-1"


def test_format_cores_order_independent():
    assert format_cores([3, 1, 2, 2]) == format_cores([1, 2, 3])


def test_format_binding_layout():
    line = format_binding(0, "host", [[0, 1, 2, 3]])
    assert line == "Rank    0 on             host has   1 threads on cores: (0-3)"


def test_format_binding_one_group_per_thread():
    line = format_binding(3, "node", [[0], [1, 2], [4, 6]])
    assert line.endswith("(0)(1-2)(4,6)")
    assert "has   3 threads" in line


def test_collect_binding_shape():
    binding = collect_binding(3)
    assert len(binding) == 3
    for cores in binding:
        assert cores == sorted(cores)
        assert all(core >= 0 for core in cores)


def test_collect_binding_threads_agree():
    binding = collect_binding(2)
    assert binding[0] == binding[1]


def test_collect_binding_rejects_zero():
    with pytest.raises(ValueError):
        collect_binding(0)


def test_main_prints_rank_zero(capsys):
    assert main(["--threads", "2"]) == 0
    out = capsys.readouterr().out.strip()
    assert out.startswith("Rank    0 on ")
    assert socket.gethostname()[:99] in out
    assert out.count("(") == 2


def test_main_rejects_bad_threads():
    with pytest.raises(SystemExit):
        main(["--threads", "0"])