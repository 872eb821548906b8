# fiatutil

Small utilities with no dependencies outside the standard library. They cover
calendar arithmetic, numbered binary file units, environment and process
information, command-line argument storage and a CPU-binding report.

## Modules

### `fiatutil.julian`

Calendar arithmetic on Julian day numbers. It uses proleptic Gregorian dates
with years 0 to 9999.

- Value types:
  - `Date(year, month, day)` and `Time(hour=0, minute=0, second=0)` are frozen dataclasses.
- Validation and leap years:
  - `is_leap`
  - `validate_date`
  - `validate_time`
- Conversions:
  - `date_to_julian` and `julian_to_date`
  - `hms_to_seconds` and `seconds_to_hms`
  - `date_to_century` and `century_to_date`. Century day 1 is 1900-01-01.
  - `date_to_yearday` and `yearday_to_date`
- Differences:
  - `date_minus_date`
  - `hours_between`
  - `minutes_between`
  - `seconds_between`
- Increments:
  - `add_days` returns a `Date`.
  - `add_hours`, `add_minutes` and `add_seconds` return a `(Date, Time)` pair.
- Errors:
  - All errors derive from `JulianError`, which is a `ValueError`.
  - `InvalidDateError` is raised for a bad date.
  - `InvalidTimeError` is raised for a bad time of day.
  - `OutOfRangeError` is raised for a result that does not fit a signed 32-bit integer.
  - Each error class carries a numeric `code`.

### `fiatutil.ec_datetime`

A flat interface over `fiatutil.julian` that takes and returns plain integers.

- Differences: `daydiff`, `hourdiff`, `mindiff` and `secdiff`.
- Increments: `dayincr`, `hourincr`, `minincr` and `secincr`. Each returns a tuple.
- Conversions:
  - `cd2date`
  - `yd2date`
  - `idate2cd`
  - `idate2yd`
  - `icd2ymd` converts to a `YYYYMMDD` integer.
  - `iymd2cd` converts from a `YYYYMMDD` integer.

### `fiatutil.bytes_io`

`UnitTable` is a table of open binary files, each addressed by an integer unit
number.

- Methods:
  - `open(name, mode)` returns a unit number.
  - `seek(unit, offset, whence)` takes `whence` 0 for start, 1 for current position or 2 for end. From the end, the offset is always negative.
  - `tell`
  - `read(unit, nbytes)`
  - `write(unit, data)`
  - `flush`, which flushes and then fsyncs.
  - `close`, which flushes first.
- Unit numbers:
  - Freed slots are reused, lowest first.
  - The table doubles in size when it is full.
  - A `UnitTable` is a context manager and closes every open unit on exit.
- Modes, as handled by `parse_mode`:
  - `a` or `A` opens for appending.
  - `w`, `W`, `c` or `C` opens for writing.
  - `r` or `R` opens for reading.
  - `r+` opens for reading and writing.
- Errors:
  - Failures raise `BytesIOError`, an `OSError` with a classic `code` attribute.
  - `read` raises `EndOfFileError` when fewer bytes remain than were asked for. Its `.data` holds what was read.
  - Closing a unit that is already closed gives a `RuntimeWarning`.
- Environment variables:
  - `BYTES_IO_BUFSIZE` sets the file buffer size through `buffer_size_from_env`. The default is 8192.
  - `BYTES_IO_DEBUG` turns on debug printing through `debug_level_from_env`.

### `fiatutil.ec_env`

- Environment:
  - `environ_entries` returns the environment as `NAME=value` strings.
  - `putenv_overwrite(assignment)` sets `NAME=value`. A bare `NAME` removes the variable.
  - `putenv_nooverwrite(assignment)` sets the variable only if it is unset.
- Sleeping: `sleep(seconds)` and `microsleep(usecs)`.
- Host:
  - `hostname` returns the name cut at the first dot.
  - `padded_hostname(length, padding=" ")` pads or truncates it to `length`.
- Process and CPU:
  - `pid` and `tid` return the process and thread ids.
  - `core_id` reads the current core from `/proc` and returns -1 when it is unavailable.
  - `affinity` returns the CPUs the thread may run on, as a compact string.
  - `cpuset_to_string` formats such a set: runs of three or more become `a-b`, and a pair stays `a,b`.
  - `cpu_model(cpuinfo_path="/proc/cpuinfo")` returns the CPU model name.
- Time: `mpi_epoch` returns wall-clock seconds since the Unix epoch.
- MPI launch information:
  - `mpi_rank` guesses the rank from launcher variables such as `PMI_RANK`, `OMPI_COMM_WORLD_RANK` and `SLURM_*`. It defaults to 0.
  - `mpi_size` guesses the task count the same way. It defaults to 1.
- umask: `set_umask_from_env` applies an octal `EC_SET_UMASK`, reports the change on stderr and returns `(new, old)`.

### `fiatutil.ec_args`

`ArgumentRegistry` keeps the command line with the program name at index 0.

- `register(argv)` takes effect only the first time it is called. Arguments stop at the first `None` or at the terminator, which is `MPL_CL_TERMINATE` or `-^` by default.
- `argc` and `argv` return the count and the arguments.
- `getarg(argno)` returns `""` when the argument is unavailable.
- `putarg(argno, value)` raises `IndexError` when `argno` is out of range.
- `reset(argc, terminator=None)` discards the arguments and makes room for `argc` empty ones.

`executable_path()` finds the running executable. It tries `/proc` first, then `ps` and a `PATH` search, and falls back to `/unknown/executable`.

### `fiatutil.system_info`

- `is_little_endian` and `is_big_endian` report the byte order.
- `openmp_version(openmp)` maps an `_OPENMP` date value to `(version, subversion)`, for example `201511` to `(4, 5)`. Unknown values give `(0, 0)`.

### `fiatutil.printbinding`

- `format_cores` renders core numbers compactly, for example `0-3,8`. An empty set is shown as `-1`.
- `format_binding(rank, hostname, thread_cores)` builds the one-line report.
- `collect_binding(nthreads=None)` starts the given number of threads and returns the cores each one may run on. The default thread count is `OMP_NUM_THREADS`, or 1.

## Example

```python
from fiatutil.ec_datetime import daydiff, icd2ymd
from fiatutil.julian import Date, Time, add_hours

daydiff(2024, 3, 1, 2024, 2, 1)            # 29
icd2ymd(1)                                 # 19000101
add_hours(Date(2024, 12, 31), Time(23), 2) # (Date(2025, 1, 1), Time(1, 0, 0))
```

## Command line

```
fiat-printbinding [-n THREADS]
```

The command prints one line: the host name, the thread count and, for each
thread, the cores it may run on, for example `(0-3,8)`.

## What it does not do

`fiat-printbinding` reports only the process it runs in, as rank 0. It does not
gather bindings from other MPI ranks.

`mpi_rank` and `mpi_size` only read environment variables. Nothing in the
package talks to an MPI library.

## Tests

```
pip install -e .[test]
pytest
```