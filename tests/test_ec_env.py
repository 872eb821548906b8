import os
import threading
import time

import pytest

from fiatutil import ec_env


def test_environ_entries_contains_variable(monkeypatch):
    monkeypatch.setenv("FIATUTIL_ENTRY", "value1")
    assert "FIATUTIL_ENTRY=value1" in ec_env.environ_entries()


def test_environ_entries_count_matches_environ():
    assert len(ec_env.environ_entries()) == len(os.environ)


def test_putenv_overwrite_replaces_and_strips(monkeypatch):
    monkeypatch.setenv("FIATUTIL_OW", "old")
    ec_env.putenv_overwrite("FIATUTIL_OW=new   ")
    entries = ec_env.environ_entries()
    assert "FIATUTIL_OW=new" in entries
    assert "FIATUTIL_OW=old" not in entries


def test_putenv_overwrite_bare_name_removes(monkeypatch):
    monkeypatch.setenv("FIATUTIL_RM", "x")
    ec_env.putenv_overwrite("FIATUTIL_RM")
    entries = ec_env.environ_entries()
    assert [e for e in entries if e.startswith("FIATUTIL_RM=")] == []


def test_putenv_blank_does_nothing():
    before = sorted(ec_env.environ_entries())
    ec_env.putenv_overwrite("    ")
    ec_env.putenv_nooverwrite("")
    assert sorted(ec_env.environ_entries()) == before


def test_putenv_nooverwrite_keeps_existing(monkeypatch):
    monkeypatch.setenv("FIATUTIL_NO", "keep")
    ec_env.putenv_nooverwrite("FIATUTIL_NO=other")
    entries = ec_env.environ_entries()
    assert "FIATUTIL_NO=keep" in entries
    assert "FIATUTIL_NO=other" not in entries


def test_putenv_nooverwrite_sets_absent(monkeypatch):
    monkeypatch.setenv("FIATUTIL_NEW", "tmp")
    monkeypatch.delenv("FIATUTIL_NEW")
    ec_env.putenv_nooverwrite("FIATUTIL_NEW=fresh ")
    assert "FIATUTIL_NEW=fresh" in ec_env.environ_entries()


def test_sleep_zero_and_negative():
    assert ec_env.sleep(0) == 0
    assert ec_env.sleep(-5) == 0


def test_microsleep_waits():
    start = ec_env.mpi_epoch()
    ec_env.microsleep(2000)
    assert ec_env.mpi_epoch() - start >= 0.0015


def test_hostname_has_no_dot():
    assert "." not in ec_env.hostname()


@pytest.mark.parametrize("length", [1, 5, 80])
def test_padded_hostname_length(length):
    result = ec_env.padded_hostname(length, "*")
    assert len(result) == length
    assert result.startswith(ec_env.hostname()[:length])
    assert result.rstrip("*") == ec_env.hostname()[:length].rstrip("*")


def test_pid_and_tid():
    assert ec_env.pid() == os.getpid()
    assert ec_env.tid() == threading.get_native_id()


def test_core_id_range():
    assert ec_env.core_id() >= -1


@pytest.mark.parametrize(
    "cpus, expected",
    [
        ({0, 1, 2, 3}, "0-3"),
        ([1, 0], "0,1"),
        ([], ""),
    ],
)
def test_cpuset_to_string(cpus, expected):
    assert ec_env.cpuset_to_string(cpus) == expected


def test_cpuset_to_string_covers_all_cpus():
    cpus = {0, 1, 2, 5, 7, 8, 12}
    parsed = set()
    for part in ec_env.cpuset_to_string(cpus).split(","):
        lo, _, hi = part.partition("-")
        parsed.update(range(int(lo), int(hi or lo) + 1))
    assert parsed == cpus


def test_mpi_epoch_close_to_now():
    assert abs(ec_env.mpi_epoch() - time.time()) < 5


def test_cpu_model_reads_file(tmp_path):
    path = tmp_path / "cpuinfo"
    path.write_text("processor\t: 0\nmodel name\t: Fake CPU 9000\nflags\t: x\n")
    assert ec_env.cpu_model(str(path)) == "Fake CPU 9000"


def test_cpu_model_missing_file(tmp_path):
    assert ec_env.cpu_model(str(tmp_path / "nope")) == ""


def test_mpi_rank_from_env():
    assert ec_env.mpi_rank({"PMI_RANK": "7", "EC_FARM_ID": "3"}) == 7
    assert ec_env.mpi_rank({"EC_FARM_ID": "3"}) == 3


def test_mpi_rank_default_and_negative():
    assert ec_env.mpi_rank({}) == 0
    assert ec_env.mpi_rank({"PMI_RANK": "-4"}) == 0


def test_mpi_size_from_env():
    assert ec_env.mpi_size({"SLURM_NTASKS": "16"}) == 16
    assert ec_env.mpi_size({}) == 1
    assert ec_env.mpi_size({"PMI_SIZE": "0"}) == 1


def test_set_umask_from_env():
    result = ec_env.set_umask_from_env({"EC_SET_UMASK": "027"})
    current = os.umask(result[1])
    assert result[0] == 0o27
    assert current == 0o27


def test_set_umask_absent_or_invalid():
    assert ec_env.set_umask_from_env({}) is None
    assert ec_env.set_umask_from_env({"EC_SET_UMASK": "xyz"}) is None