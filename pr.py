#!/usr/bin/env python3
"""
pr — tmux project switcher
Switch between tmux sessions bound to project directories.

Usage:
    pr                          List open tmux sessions
    pr -a                       List open and previously used sessions
    pr -w                       Wide listing (adds the .todo column)
    pr <dir|name>               Switch to a session, creating it if needed
    pr -                        Switch to the previous session (--, --- ...)
    pr -c /abs/dir              Create the directory if it does not exist
    pr -T                       Create a temporary project /tmp/tN
    pr -edit                    Edit the pr config (session history)
    pr -todo                    Edit the .todo file of the current project
    pr --interactive            Pick a session from a list
    pr -version                 Show version

A <dir|name> can be an absolute path, "." for the current directory, a tmux
session name or prefix, a saved session name, alias or prefix, or the name or
prefix of a directory inside $HOME.

Bind the picker in ~/.tmux.conf:
    bind P display-popup -E -E "pr --interactive"
"""

import datetime
import json
import logging
import os
import shlex
import shutil
import subprocess
import sys
import tempfile
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Mapping, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Input, OptionList, Static
from textual.widgets.option_list import Option
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

# ── Constants ─────────────────────────────────────────────────────────

VERSION = "v0.1"
CONFIG_FILE = Path(".config") / "pr.json"  # relative to $HOME
DEFAULT_TEMP_ROOT = "/tmp"
DEFAULT_EDITOR = "nano"
TODO_FILENAME = ".todo"
HERE_MARKER = "."
PREV_MARKER = "-"
SUFFIXES = ["", "1", "2", "3", "4", "5", "6", "7", "8", "9"]
MAX_TEMP_PROJECTS = 1024
LIST_FORMAT = "\t".join([
    "#S",
    "#{session_path}",
    "#{session_attached}",
    "#{session_windows}",
    "#{session_activity}",
])

logger = logging.getLogger("pr")
console = Console()
err_console = Console(stderr=True)

# ── Errors ────────────────────────────────────────────────────────────


class PrError(Exception):
    """A failure reported to the user; aborts the invocation."""


class UsageError(PrError):
    pass


class ResolutionError(PrError):
    """No project matched the token."""


class FilesystemError(PrError):
    """Directory missing, not creatable, or a name range is exhausted."""


class BackendError(PrError):
    """tmux could not be run or exited non-zero."""


class PersistenceError(PrError):
    """The favourites document is unreadable, malformed or unwritable."""


# ── Context ───────────────────────────────────────────────────────────


@dataclass
class Context:
    home: Path
    config_path: Path
    temp_root: str = DEFAULT_TEMP_ROOT
    editor: str = DEFAULT_EDITOR

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Context":
        env = os.environ if environ is None else environ
        home = Path.home()
        config = env.get("PR_CONFIG") or str(home / CONFIG_FILE)
        return cls(
            home=home,
            config_path=Path(config).expanduser(),
            temp_root=env.get("PR_TEMP_ROOT") or DEFAULT_TEMP_ROOT,
            editor=env.get("EDITOR") or DEFAULT_EDITOR,
        )


# ── Data ──────────────────────────────────────────────────────────────


@dataclass
class LiveSession:
    name: str
    path: str
    attached: bool = False
    last_activity: float = 0.0
    window_count: int = 0

    def fmt_last_activity(self, now: Optional[float] = None) -> str:
        if not self.last_activity:
            return ""
        now = time.time() if now is None else now
        ts = datetime.datetime.fromtimestamp(self.last_activity)
        if now - self.last_activity < 24 * 3600:
            return ts.strftime("%H:%M:%S")
        return ts.strftime("%b %d")

    def fmt_attached(self) -> str:
        return "*" if self.attached else ""


@dataclass
class Target:
    """Where a token resolved to: session name, directory and start options."""
    name: str
    path: str
    cmd: str = ""
    env: Dict[str, str] = field(default_factory=dict)


@dataclass
class FavouriteSession:
    name: str
    path: str
    cmd: str = ""
    aliases: List[str] = field(default_factory=list)
    env: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, d) -> "FavouriteSession":
        if not isinstance(d, dict):
            raise PersistenceError(f"session entry must be an object, got {type(d).__name__}")
        name, path = d.get("name"), d.get("path")
        if not isinstance(name, str) or not isinstance(path, str):
            raise PersistenceError(f"session entry needs string 'name' and 'path': {d!r}")
        aliases = d.get("aliases") or []
        env = d.get("env") or {}
        if not isinstance(aliases, list) or not isinstance(env, dict):
            raise PersistenceError(f"session '{name}': 'aliases' must be a list and 'env' an object")
        return cls(
            name=name,
            path=path,
            cmd=str(d.get("cmd") or ""),
            aliases=[str(a) for a in aliases],
            env={str(k): str(v) for k, v in env.items()},
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "path": self.path,
            "cmd": self.cmd,
            "aliases": list(self.aliases),
            "env": dict(self.env),
        }

    def target(self) -> Target:
        return Target(name=self.name, path=self.path, cmd=self.cmd, env=dict(self.env))

    def as_live_session(self) -> LiveSession:
        """Half-filled LiveSession, for listing sessions that are not running."""
        return LiveSession(name=self.name, path=self.path)


# ── Favourites store ──────────────────────────────────────────────────


class FavouritesStore:
    """Session history, most recently used first, persisted as JSON.

    Loaded once at start and written at most once, only if ``touch`` changed
    the order. Sessions under the temp root are never remembered.
    """

    def __init__(self, path: Path, temp_root: str = DEFAULT_TEMP_ROOT,
                 sessions: Optional[List[FavouriteSession]] = None):
        self.path = Path(path)
        self.temp_root = temp_root
        self.sessions: List[FavouriteSession] = list(sessions or [])
        self.dirty = False

    @classmethod
    def load(cls, path: Path, temp_root: str = DEFAULT_TEMP_ROOT) -> "FavouritesStore":
        store = cls(path, temp_root)
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return store
        except json.JSONDecodeError as e:
            raise PersistenceError(f"cannot parse {path}: {e}") from e
        except OSError as e:
            raise PersistenceError(f"cannot read {path}: {e}") from e

        if not isinstance(data, dict):
            raise PersistenceError(f"{path}: expected an object with a 'sessions' list")
        raw = data.get("sessions") or []
        if not isinstance(raw, list):
            raise PersistenceError(f"{path}: 'sessions' must be a list")
        store.sessions = [FavouriteSession.from_dict(d) for d in raw]
        logger.debug("loaded %d saved sessions from %s", len(store.sessions), path)
        return store

    def __iter__(self) -> Iterator[FavouriteSession]:
        return iter(self.sessions)

    def __len__(self) -> int:
        return len(self.sessions)

    def index(self, name: str) -> int:
        for i, fav in enumerate(self.sessions):
            if fav.name == name:
                return i
        return -1

    def find(self, name: str) -> Optional[FavouriteSession]:
        i = self.index(name)
        return self.sessions[i] if i >= 0 else None

    def touch(self, name: str, path: str):
        """Move session *name* to the front, adding it if it is new."""
        if is_ephemeral(path, self.temp_root):
            return
        i = self.index(name)
        if i == 0:
            return
        if i > 0:
            fav = self.sessions.pop(i)
        else:
            fav = FavouriteSession(name=name, path=path)
        self.sessions.insert(0, fav)
        self.dirty = True

    def save(self):
        if not self.dirty:
            return
        doc = {"sessions": [fav.to_dict() for fav in self.sessions]}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            # mkstemp creates the file with mode 0600
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
            )
        except OSError as e:
            raise PersistenceError(f"cannot write {self.path}: {e}") from e
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(doc, f, indent=4, ensure_ascii=False)
                f.write("\n")
            os.replace(tmp_path, self.path)
        except OSError as e:
            try:
                tmp_path.unlink()
            except OSError:
                pass
            raise PersistenceError(f"cannot write {self.path}: {e}") from e
        logger.debug("saved %d sessions to %s", len(self.sessions), self.path)
        self.dirty = False


# ── tmux backend ──────────────────────────────────────────────────────


def _to_int(s: str) -> int:
    try:
        return int(s)
    except ValueError:
        return 0


def parse_session_list(out: str) -> List[LiveSession]:
    """Parse ``tmux list-sessions -F LIST_FORMAT`` output."""
    sessions: List[LiveSession] = []
    for line in out.splitlines():
        parts = line.split("\t")
        if len(parts) != 5:
            continue
        name, path, attached, windows, activity = parts
        sessions.append(LiveSession(
            name=name,
            path=path,
            attached=attached != "0",
            last_activity=float(_to_int(activity)),
            window_count=_to_int(windows),
        ))
    return sessions


class TmuxBackend:
    """Live tmux state: list, create and switch sessions."""

    def __init__(self, run: Callable = subprocess.run, execvp: Callable = os.execvp,
                 environ: Optional[Mapping[str, str]] = None):
        self._run = run
        self._execvp = execvp
        self._environ = os.environ if environ is None else environ

    @property
    def inside_tmux(self) -> bool:
        return bool(self._environ.get("TMUX"))

    def _tmux(self, *args: str) -> subprocess.CompletedProcess:
        cmd = ["tmux", *args]
        logger.debug("running %s", shlex.join(cmd))
        try:
            return self._run(cmd, capture_output=True, text=True)
        except OSError as e:
            raise BackendError(f"cannot run tmux: {e}") from e

    @staticmethod
    def _output(r: subprocess.CompletedProcess) -> str:
        return ((r.stderr or "") + (r.stdout or "")).strip()

    def list_sessions(self) -> List[LiveSession]:
        try:
            r = self._tmux("list-sessions", "-F", LIST_FORMAT)
        except BackendError as e:
            logger.warning("tmux list-sessions: %s", e)
            return []
        if r.returncode != 0:
            out = self._output(r)
            # no server just means there are no sessions yet
            level = logging.DEBUG if "no server running" in out else logging.WARNING
            logger.log(level, "tmux list-sessions: %s", out)
            return []
        return parse_session_list(r.stdout)

    def create_session(self, name: str, path: str, cmd: str = "",
                       env: Optional[Mapping[str, str]] = None):
        args = ["new-session", "-c", path, "-s", name, "-d"]
        for k, v in (env or {}).items():
            args += ["-e", f"{k}={v}"]
        if cmd:
            # must be the last argument
            args.append(cmd)
        r = self._tmux(*args)
        if r.returncode != 0:
            raise BackendError(f"tmux new-session {name}: {self._output(r)}")

    def switch_to(self, name: str):
        """Switch the current client, or attach (replacing this process) outside tmux."""
        if self.inside_tmux:
            r = self._tmux("switch-client", "-t", name)
            if r.returncode != 0:
                raise BackendError(f"tmux switch-client {name}: {self._output(r)}")
            return
        logger.debug("attaching to %s", name)
        try:
            self._execvp("tmux", ["tmux", "attach-session", "-t", name])
        except OSError as e:
            raise BackendError(f"cannot attach to {name}: {e}") from e

    def current_session_path(self) -> str:
        if not self.inside_tmux:
            raise BackendError("not inside a tmux session")
        r = self._tmux("display-message", "-p", "#{session_path}")
        if r.returncode != 0:
            raise BackendError(f"tmux display-message: {self._output(r)}")
        return r.stdout.strip()


# ── Directories ───────────────────────────────────────────────────────


def is_ephemeral(path: str, temp_root: str) -> bool:
    """True if *path* lies inside *temp_root* (not the root itself)."""
    return str(path).startswith(temp_root.rstrip("/") + "/")


def session_name_for(path: str) -> str:
    return os.path.basename(path.rstrip("/")) or path


def sanitize_session_name(name: str) -> str:
    # tmux silently rewrites these characters in session names
    return name.replace(".", "_").replace(":", "_")


def find_home_dir(home: Path, token: str) -> Optional[str]:
    """Directory in *home* named *token*, else the first one starting with it."""
    exact = os.path.normpath(os.path.join(home, token))
    if os.path.isdir(exact):
        return exact
    try:
        entries = sorted(os.listdir(home))
    except OSError as e:
        raise FilesystemError(f"cannot list {home}: {e}") from e
    for entry in entries:
        if entry.startswith(token):
            p = os.path.join(home, entry)
            if os.path.isdir(p):
                return p
    return None


def allocate_temp_project(temp_root: str) -> str:
    """Create the first free <temp_root>/tN directory and return its path."""
    for i in range(MAX_TEMP_PROJECTS):
        path = os.path.join(temp_root, f"t{i}")
        try:
            os.mkdir(path, 0o750)
        except FileExistsError:
            continue
        except OSError as e:
            raise FilesystemError(f"cannot create temporary directory {path}: {e}") from e
        logger.debug("created temporary project %s", path)
        return path
    raise FilesystemError(
        f"reached max number of temporary projects ({MAX_TEMP_PROJECTS}). "
        f"Please clean your {os.path.join(temp_root, 't*')} folders."
    )


def todo_path(directory: str) -> Path:
    return Path(directory) / TODO_FILENAME


def todo_contents(directory: str) -> str:
    p = todo_path(directory)
    if not p.is_file():
        return ""
    try:
        return p.read_text(encoding="utf-8", errors="replace").rstrip("\n")
    except OSError as e:
        raise FilesystemError(f"cannot read {p}: {e}") from e


# ── Resolution ────────────────────────────────────────────────────────


def count_repeated(token: str, char: str) -> int:
    """Length of *token* if it is made only of *char*, else 0."""
    if token and token == char * len(token):
        return len(token)
    return 0


def _resolve_absolute(ctx: Context, token: str, allow_create_dir: bool) -> Target:
    path = os.path.normpath(token)
    if not os.path.isdir(path):
        if not os.path.isdir(os.path.dirname(path)):
            raise FilesystemError(
                f"cannot switch to {path}: looks like a dir but does not exist and cannot be created"
            )
        if not (allow_create_dir or is_ephemeral(path, ctx.temp_root)):
            raise FilesystemError(
                f"cannot switch to {path} (directory does not exist): "
                "use -c flag to create a new directory"
            )
        try:
            os.mkdir(path)
        except OSError as e:
            raise FilesystemError(f"cannot create {path}: {e}") from e
        logger.debug("created %s", path)
    return Target(name=session_name_for(path), path=path)


def _resolve_previous(sessions: List[LiveSession], n: int) -> Target:
    if len(sessions) < 2:
        raise ResolutionError("cannot switch to a previous session (too few sessions)")
    n = min(n, len(sessions) - 1)
    # stable: equal activity keeps listing order
    ordered = sorted(sessions, key=lambda s: s.last_activity, reverse=True)
    s = ordered[n]
    return Target(name=s.name, path=s.path)


def _match_live(sessions: List[LiveSession], token: str) -> Optional[Target]:
    for s in sessions:
        if s.name == token:
            return Target(name=s.name, path=s.path)
    match = None
    for s in sessions:
        if s.name.startswith(token):
            match = s  # the last one wins
    if match is not None:
        return Target(name=match.name, path=match.path)
    return None


def _match_favourite(favourites: FavouritesStore, token: str) -> Optional[Target]:
    for fav in favourites:
        if fav.name == token or token in fav.aliases:
            return fav.target()
    # aliases are short enough to be typed in full, only names are prefix-matched
    for fav in favourites:
        if fav.name.startswith(token):
            return fav.target()
    return None


def resolve(ctx: Context, token: str, sessions: List[LiveSession],
            favourites: FavouritesStore, allow_create_dir: bool = False) -> Target:
    """Turn a user token into a session name and directory.

    Rules, first match wins:
      "." or an absolute path, a run of "-" (previous sessions by activity),
      live session name then prefix, saved session name or alias then name
      prefix, directory in $HOME then directory prefix.
    """
    if token == HERE_MARKER:
        try:
            token = os.getcwd()
        except OSError as e:
            raise FilesystemError(f"cannot determine current directory: {e}") from e
    if token.startswith("/"):
        return _resolve_absolute(ctx, token, allow_create_dir)

    n = count_repeated(token, PREV_MARKER)
    if n:
        return _resolve_previous(sessions, n)

    target = _match_live(sessions, token)
    if target is not None:
        logger.debug("%r matched live session %s", token, target.name)
        return target
    target = _match_favourite(favourites, token)
    if target is not None:
        logger.debug("%r matched saved session %s", token, target.name)
        return target

    path = find_home_dir(ctx.home, token)
    if path is None:
        raise ResolutionError(f"no such project: '{token}' (directory ~/{token}* does not exist)")
    logger.debug("%r matched directory %s", token, path)
    return Target(name=session_name_for(path), path=path)


# ── Switching ─────────────────────────────────────────────────────────


def materialize(target: Target, sessions: List[LiveSession], backend,
                favourites: FavouritesStore) -> str:
    """Find or create the live session for *target* and return its name.

    A live session is reused only if it is bound to the same directory;
    otherwise the next numeric suffix is tried.
    """
    by_name = {s.name: s for s in sessions}
    base = sanitize_session_name(target.name)
    for suffix in SUFFIXES:
        candidate = base + suffix
        live = by_name.get(candidate)
        if live is None:
            favourites.touch(target.name, target.path)
            backend.create_session(candidate, target.path, target.cmd, target.env)
            logger.debug("created session %s in %s", candidate, target.path)
            return candidate
        if live.path == target.path:
            # record the suffixed name so the base entry keeps its own directory
            favourites.touch(target.name + suffix, live.path)
            return candidate
        logger.debug("session %s is bound to %s, trying next suffix", candidate, live.path)
    raise FilesystemError(
        f"cannot create session {base} because names "
        f"{base}, {base}{SUFFIXES[1]}..{base}{SUFFIXES[-1]} are occupied"
    )


def change_session(ctx: Context, token: str, sessions: List[LiveSession], backend,
                   favourites: FavouritesStore, allow_create_dir: bool = False) -> str:
    """Switch to the session for *token*, creating it if needed."""
    target = resolve(ctx, token, sessions, favourites, allow_create_dir)
    name = materialize(target, sessions, backend, favourites)
    # switching may replace this process, so persist first
    favourites.save()
    backend.switch_to(name)
    return name


def open_in_editor(editor: str, filename):
    """Replace this process with *editor* opened on *filename*."""
    argv = shlex.split(editor) or [DEFAULT_EDITOR]
    if shutil.which(argv[0]) is None:
        raise PrError(f"cannot locate editor: {argv[0]}")
    logger.debug("editing %s with %s", filename, argv[0])
    try:
        os.execvp(argv[0], argv + [str(filename)])
    except OSError as e:
        raise PrError(f"cannot start editor {argv[0]}: {e}") from e


# ── Listing ───────────────────────────────────────────────────────────


def listing_rows(sessions: List[LiveSession], favourites: FavouritesStore,
                 show_all: bool = False) -> List[LiveSession]:
    """Live sessions, then (with *show_all*) saved ones not running; one row per name."""
    rows = list(sessions)
    if show_all:
        seen = {s.name for s in sessions}
        for fav in favourites:
            # a hand-edited config may repeat a name
            if fav.name not in seen:
                seen.add(fav.name)
                rows.append(fav.as_live_session())
    return rows


def render_sessions(rows: List[LiveSession], wide: bool = False,
                    now: Optional[float] = None) -> Table:
    table = Table(box=None, header_style="green underline", pad_edge=False)
    table.add_column("name", style="yellow")
    for col in ("path", "windows", "activity", "attchd"):
        table.add_column(col)
    if wide:
        table.add_column("todo")
    for s in rows:
        cells = [
            Text(s.name),
            Text(s.path),
            Text(str(s.window_count)),
            Text(s.fmt_last_activity(now)),
            Text(s.fmt_attached()),
        ]
        if wide:
            cells.append(Text(todo_contents(s.path)))
        table.add_row(*cells)
    return table


def _picker_row(s: LiveSession, width: int, wide: bool) -> Text:
    text = Text()
    text.append(f"{s.name:<{width}}  ", style="bold yellow")
    text.append(s.path, style="dim")
    activity = s.fmt_last_activity()
    if activity:
        text.append(f"  {activity}", style="cyan")
    if s.attached:
        text.append("  *", style="green")
    if wide:
        todo = todo_contents(s.path)
        if todo:
            text.append(f"  {todo.splitlines()[0]}", style="magenta")
    return text


class PickerApp(App):
    """Session list plus a prompt; exits with the chosen token or None."""

    CSS = """
    #picker-title {
        height: 1;
        padding: 0 1;
    }
    #picker-list {
        height: 1fr;
    }
    #picker-input {
        dock: bottom;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    def __init__(self, rows: List[LiveSession], wide: bool = False):
        super().__init__()
        self.rows = rows
        self.wide = wide

    def compose(self) -> ComposeResult:
        width = max((len(s.name) for s in self.rows), default=0)
        yield Static(Text("◆ pr — switch project", style="bold cyan"), id="picker-title")
        yield OptionList(
            *[Option(_picker_row(s, width, self.wide), id=s.name) for s in self.rows],
            id="picker-list",
        )
        yield Input(placeholder="input project name to switch to", id="picker-input")

    def on_mount(self):
        self.query_one("#picker-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted):
        val = event.value.strip()
        self.exit(val if val else None)

    def on_option_list_option_selected(self, event: OptionList.OptionSelected):
        self.exit(event.option.id)

    def action_cancel(self):
        self.exit(None)


# ── CLI ───────────────────────────────────────────────────────────────

FLAGS = {
    "a": "show_all",
    "w": "wide",
    "T": "temp_project",
    "c": "allow_create_dir",
    "edit": "edit_config",
    "todo": "edit_todo",
    "t": "edit_todo",
    "interactive": "interactive",
    "version": "version",
    "h": "help",
    "help": "help",
}


@dataclass
class Options:
    show_all: bool = False
    wide: bool = False
    temp_project: bool = False
    allow_create_dir: bool = False
    edit_config: bool = False
    edit_todo: bool = False
    interactive: bool = False
    version: bool = False
    help: bool = False
    token: str = ""


def parse_args(args: List[str]) -> Options:
    # Hand-rolled: "-", "--" and "---" are tokens, not flags.
    opts = Options()
    positional: List[str] = []
    for arg in args:
        if arg.startswith("-") and not count_repeated(arg, PREV_MARKER):
            name = arg[2:] if arg.startswith("--") else arg[1:]
            attr = FLAGS.get(name)
            if attr is None:
                raise UsageError(f"unknown flag: {arg}")
            setattr(opts, attr, True)
        else:
            positional.append(arg)
    if positional:
        opts.token = positional[0]
    return opts


def setup_logging(level: Optional[str] = None):
    level = level or os.environ.get("PR_LOG_LEVEL", "WARNING")
    if not logger.handlers:
        handler = RichHandler(console=err_console, show_time=False, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.propagate = False
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))


def run(opts: Options, ctx: Context, backend):
    if opts.help:
        console.print(__doc__.strip(), markup=False, highlight=False)
        return
    if opts.version:
        console.print(VERSION, markup=False, highlight=False)
        return
    if opts.edit_todo:
        open_in_editor(ctx.editor, todo_path(backend.current_session_path()))
        return
    if opts.edit_config:
        open_in_editor(ctx.editor, ctx.config_path)
        return

    favourites = FavouritesStore.load(ctx.config_path, ctx.temp_root)
    sessions = backend.list_sessions()

    token = ""
    if opts.temp_project:
        token = allocate_temp_project(ctx.temp_root)
    if opts.token:
        token = opts.token

    if opts.interactive:
        rows = listing_rows(sessions, favourites, opts.show_all)
        choice = PickerApp(rows, wide=opts.wide).run()
        if not choice:
            return
        token = choice

    if token:
        change_session(ctx, token, sessions, backend, favourites, opts.allow_create_dir)
        return
    rows = listing_rows(sessions, favourites, opts.show_all)
    console.print(render_sessions(rows, wide=opts.wide))


def main(argv: Optional[List[str]] = None):
    args = sys.argv[1:] if argv is None else argv
    setup_logging()
    try:
        opts = parse_args(args)
    except UsageError as e:
        err_console.print(Text.assemble(("error: ", "bold red"), str(e)))
        err_console.print("Run 'pr -help' for usage information.", markup=False)
        sys.exit(2)
    try:
        run(opts, Context.from_env(), TmuxBackend())
    except PrError as e:
        err_console.print(Text.assemble(("error: ", "bold red"), str(e)))
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
