# pyenvscan

Find the Python interpreters on a machine and tell what kind of environment
each one belongs to.

pyenvscan looks in the directories named in `PATH` and in the current
directory. The current directory is checked along with its `.venv`, `.conda`,
`.virtualenv` and `venv` folders and its direct sub folders. It classifies each
interpreter it finds in one of these ways:

- `Venv`: a `pyvenv.cfg` sits beside the interpreter's `bin`/`Scripts`
  directory or in its prefix.
- `VirtualEnv`: `activate` scripts sit beside the interpreter.
- `VirtualEnvWrapper`: a virtualenv under `WORKON_HOME`, or under
  `~/.virtualenvs` when `WORKON_HOME` is unset. On Windows the fallback is
  `Envs` or `virtualenvs` in the user profile.

An interpreter that none of these recognise is run to learn its real
executable, `sys.prefix`, version and bitness. If it lives in a directory on
`PATH`, it is reported as `GlobalPaths`. Otherwise it is reported with no kind.

Each environment found records the executable, the prefix, the version and the
other executable names that lead to the same interpreter.

## Installation

```
pip install .
```

## Command line

```
pyenvscan
```

With no subcommand this runs `find` with listing switched on. It prints every
environment found, followed by a summary. The summary gives the time taken by
each locator, by the `PATH` search and by the current-directory search, and
then a count of environments by kind. It ends with `Refresh completed in
<n>ms`.

```
pyenvscan find --list --verbose
```

- `-l`, `--list`: print each environment as it is found.
- `-v`, `--verbose`: log at debug level instead of info.

## Library use

Identify a single interpreter:

```python
from pyenvscan.env import PythonEnv
from pyenvscan.locators import create_locators, identify_python_environment_using_locators

locators = create_locators(None)
env = PythonEnv("/home/me/project/.venv/bin/python", None, None)
found = identify_python_environment_using_locators(env, locators, [], None)
if found is not None:
    print(found.kind, found.version, found.prefix)
```

`create_locators` takes an optional mapping of environment variables (the
process environment by default). The `VirtualEnvWrapper` locator reads `HOME`,
`USERPROFILE` and `WORKON_HOME` from it.

Resolve an interpreter fully. This runs it and returns a `ResolvedEnvironment`
that holds both what discovery found (`discovered`) and what the interpreter
reported about itself (`resolved`):

```python
from pyenvscan.resolve import resolve_environment

result = resolve_environment("/usr/bin/python3", locators, [], [])
```

Discover everything and collect the results:

```python
from pyenvscan.find import find_and_report_envs
from pyenvscan.reporters import CollectingReporter

reporter = CollectingReporter()
summary = find_and_report_envs(reporter, ["/home/me/project"], locators)
for environment in reporter.get_result().environments:
    print(environment)
```

`find_and_report_envs` returns a `FindSummary` with the time taken by each
step, in seconds.

Other reporters in `pyenvscan.reporters`:

- `CacheReporter` passes each environment on only the first time it is seen.
- `StdioReporter` counts environments by kind and can print each one.

Other helpers:

- `pyenvscan.version.from_prefix(prefix)` reads the version from `pyvenv.cfg`,
  or failing that from the `patchlevel.h` header.
- `pyenvscan.executable.find_executables(path)` lists the Python executables
  in an environment or in a `bin` directory.
- `pyenvscan.pyvenv_cfg.PyVenvCfg.find(path)` parses `pyvenv.cfg`.
- `pyenvscan.telemetry.report_inaccuracies_identified_after_resolving(env, resolved)`
  reports which details of a discovered environment differ from the resolved
  one.
- `pyenvscan.platform_dirs.Platformdirs` gives the per-user cache, config and
  data directories.

## What it does not do

- It does not recognise conda, pyenv, Poetry, Pipenv or Homebrew environments.
  It also does not recognise the Windows Store, the Windows registry, or the
  macOS and Linux system installs as such. Those interpreters are reported only
  through the fallback above, as `GlobalPaths` or with no kind.
- It does not scan global folders of virtual environments such as
  `WORKON_HOME`. Those environments are identified only when their interpreter
  turns up on `PATH` or in the current directory.
- It has no server mode. It can be used only from the command line or as a
  library.

## Running the tests

```
pip install .[test]
pytest
```