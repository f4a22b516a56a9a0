# fifotrigger

Three small command-line tools that use a named pipe (FIFO) as a doorbell.
One process pulls the trigger, and another wakes up and acts on it.

## Installation

    pip install .

This installs the commands `trigger-pull`, `trigger-wait` and
`trigger-listen`.

## Commands

### trigger-pull

    trigger-pull fifo

This writes a single byte to `fifo` without blocking. It exits 0 when the
byte was written, and also when the pipe is full or has lost its reader.
If the FIFO cannot be opened (for example, because nothing has it open for
reading), it prints a message and exits 111. It exits 100 when no FIFO is
named.

### trigger-wait

    trigger-wait [ -wWdD -t timeout ] fifo [ prog ]

With `-d`, the default, this removes `fifo` and creates it again as a named
pipe. With `-D` it uses the existing file. It then waits until the trigger
is pulled or `timeout` seconds have passed. Without `-t` it waits
indefinitely.

If `prog` is given, it is started once the pipe is open. With `-w`, the
default, its exit is waited for before `trigger-wait` exits. With `-W` it
is not waited for.

The exit status is 0 if the trigger was pulled and 99 on timeout. It is 100
on a usage error and 111 on a fatal error.

A typical use is to start a background job and wait for it to signal:

    trigger-wait -t 30 /tmp/ready some-server --notify /tmp/ready

### trigger-listen

    trigger-listen [ -UdDqQv1 ] [ -c limit ] [ -t timeout ] [ -i interval ]
                   [ -g gid ] [ -u uid ] path program [ args... ]

This listens on the FIFO at `path` and runs `program` (searched for on
`PATH`) each time the trigger is pulled. It runs until it receives
SIGTERM. Options:

- `-c limit`: run at most `limit` copies of `program` at once (default 1).
- `-t timeout`: also run `program` when `timeout` seconds pass with no pull.
- `-i interval`: leave at least `interval` seconds between starts. Pulls
  that arrive in between are merged into one run.
- `-1`: run `program` once at startup.
- `-u uid`, `-g gid`: drop privileges to these ids after opening the FIFO.
- `-U`: take the uid and gid from the `UID` and `GID` environment variables.
- `-d` / `-D`: recreate the FIFO (the default) or use an existing one.
- `-v`, `-Q`, `-q`: verbose output (child counts, pids and exit statuses),
  normal output, or no output on standard error.

Example: rebuild a cache whenever something changes, at most every 10 seconds:

    trigger-listen -i 10 /run/cache.trigger rebuild-cache
    trigger-pull /run/cache.trigger

## Library use

The building blocks can also be imported:

- `fifotrigger.pull.pull(path)` pulls a trigger from Python code. It
  returns `True` if the byte was written and `False` if the pipe was full or
  had no reader.
- `fifotrigger.taia.Taia` handles time values: `Taia.now()`,
  `Taia.from_seconds(n)`, `+`, `-`, ordering, `approx()` and `frac()`.
- `fifotrigger.getopt.OptionParser` parses short options in the getopt
  style. It yields `(option, argument)` pairs and provides `remaining()`.
- `fifotrigger.scan` has `scan_ulong` and `scan_uint`, which read leading
  decimal digits.
- `fifotrigger.pathexec` has `pathexec_run` and `ExecEnvironment`, which run
  a program found on `PATH` with an adjusted environment.
- `fifotrigger.sysio` has FIFO, non-blocking, locking, privilege, wait,
  signal-mask and polling (`iopause`, `IOPauseFd`) helpers.
- `fifotrigger.errors` has `error_str`, `format_message`, `warn` and `die`,
  which produce the commands' diagnostic messages.

## Limitations

The package works only on POSIX systems. It relies on named pipes,
`fork`, `poll` and signal masks. No manual pages are included.