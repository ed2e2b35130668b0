# cordterm

The non-visual core of a terminal chat client. The package holds:

- **Configuration** (`cordterm.config`): the `Config` dataclass with its
  defaults, stored as `config.json` in the user's configuration directory.
  Use `load_config()` and `persist_config()`; `TimeFormat` and
  `ListTypingBehaviour` name the values of the enumerated settings.
- **Themes** (`cordterm.theme`): the `Theme` colours, loaded from `theme.json`
  with `load_theme()`. Helper functions: `color_to_hex()` and `from_hex()`;
  `sample_theme()` returns a grey alternative theme.
- **Time display** (`cordterm.times`): `time_to_string()` and
  `time_to_local_string()` follow the configured `TimeFormat`;
  `are_dates_the_same_day()` compares calendar days.
- **Chat model and helpers** (`cordterm.models`, `cordterm.discordutil`):
  users, channels, guilds, relationships and the session `State`, and
  functions that sort, name and inspect them (`get_private_channel_name()`,
  `sort_guilds()`, `sort_user_roles()`, `load_guilds()`, `is_blocked()`, ...).
- **Read markers** (`cordterm.readstate`): `ReadMarkers` tracks which channels
  have unread messages and which are muted, and can acknowledge reads after
  a delay.
- **Key events** (`cordterm.keys`): `Key`, `Modifier` and `KeyEvent`, with
  `event_to_string()` for a readable name such as `Ctrl+Shift+Left` and
  `events_equal()` for comparison.
- **Commands** (`cordterm.commands`, `cordterm.commandimpls`): the `Command`
  base class, a shell-like parser `parse_command()`, and the built-in
  commands `version`, `fixlayout`, `status`, `server`, `friends`,
  `file-send` and `manual`.
- **Syntax highlighting** (`cordterm.syntax`): `TviewFormatter`, a Pygments
  formatter that writes colour tags in `[#rrggbb]` form.

## Installation

```
pip install .
```

## Examples

Splitting a command line:

```python
from cordterm.commands import parse_command

parse_command('status set "do not disturb"')
# ['status', 'set', 'do not disturb']
```

Reading and changing the configuration:

```python
from cordterm.config import load_config, persist_config

config = load_config()
config.use_fixed_layout = True
persist_config()
```

Highlighting code with colour tags:

```python
import io
from pygments import highlight
from pygments.lexers import PythonLexer
from cordterm.syntax import TviewFormatter

out = io.StringIO()
highlight("print('hi')", PythonLexer(), TviewFormatter(), out)
```

## Running commands

The commands do their work through objects the caller hands in. A session
object carries `state` (a `cordterm.models.State`) and the methods a command
calls, such as `user_update_status()`, `invite_accept()`, `guild_leave()`,
`relationship_delete()` or `channel_file_send()`. A window object offers
`refresh_layout()`, `get_selected_channel()` or `get_registered_commands()`
where a command needs them. Each command writes its output to a text stream:

```python
import io
from cordterm.commandimpls.version import VersionCommand

out = io.StringIO()
VersionCommand().execute(out, [])
```

## Writing a theme file

The command below prints a complete sample theme as JSON. Save the output as
`theme.json` in the configuration directory, then edit it to suit you:

```
cordterm-theme > theme.json
```

## Configuration directory

- Linux and other Unix systems: `$XDG_CONFIG_DIR` if it is set, otherwise
  `~/.config/cordless`
- macOS: `~/.cordless`
- Windows: `%APPDATA%\cordless`

## What this package does not do

- It has no terminal user interface: no windows, lists or input widgets.
- It has no network client. Logging in and talking to a chat server is left
  to the session object you supply.
- Keyboard shortcuts cannot be bound, rebound or saved; `cordterm.keys` only
  describes and compares key events.

## Tests

```
pip install .[test]
pytest
```