# stamper/services/output_service.py

import os
import json
import shlex
import stat
import logging
import tempfile
from datetime import datetime
from typing import Dict

from stamper.models.stamp import InvalidInput, VersionStamp

# Output formats understood by the CLI
OUTPUT_FORMATS = ('properties', 'json', 'env')


def _escape_property(value: str) -> str:
    return value.replace('\\', '\\\\')


def render_properties(stamp: VersionStamp) -> str:
    """Renders a stamp as a Java/Gradle properties file."""
    return (
        f"versionCode={stamp.code}\n"
        f"versionName={_escape_property(stamp.name)}\n"
    )


def render_env(stamp: VersionStamp) -> str:
    """Renders a stamp as shell-sourceable VERSION_CODE / VERSION_NAME assignments."""
    return (
        f"VERSION_CODE={stamp.code}\n"
        f"VERSION_NAME={shlex.quote(stamp.name)}\n"
    )


def render_json(stamp: VersionStamp) -> str:
    return json.dumps(stamp.to_dict()) + "\n"


def render_stamp(stamp: VersionStamp, fmt: str) -> str:
    """Renders a single stamp in the requested output format."""
    if fmt == 'properties':
        return render_properties(stamp)
    if fmt == 'env':
        return render_env(stamp)
    if fmt == 'json':
        return render_json(stamp)
    raise InvalidInput(f"Unknown output format '{fmt}' (expected one of: {', '.join(OUTPUT_FORMATS)})")


def render_pass(stamps: Dict[str, VersionStamp], instant: datetime, fmt: str) -> str:
    """Renders the stamps of a whole pass.

    JSON output is an object keyed by variant name. Properties output prefixes
    each key with the variant name (e.g. playRelease.versionCode=...).
    """
    if fmt == 'json':
        payload = {
            'instant': instant.isoformat(),
            'variants': {name: s.to_dict() for name, s in stamps.items()},
        }
        return json.dumps(payload, indent=2) + "\n"
    if fmt == 'properties':
        lines = []
        for name, s in stamps.items():
            lines.append(f"{name}.versionCode={s.code}")
            lines.append(f"{name}.versionName={_escape_property(s.name)}")
        return "\n".join(lines) + "\n"
    raise InvalidInput(f"Output format '{fmt}' is not supported for a pass (expected json or properties)")


def _file_mode(target: str) -> int:
    """Returns the mode for a written file: the existing target's mode, else 0o666 minus the umask."""
    try:
        return stat.S_IMODE(os.stat(target).st_mode)
    except FileNotFoundError:
        pass
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_output(path: str, content: str) -> str:
    """Atomically writes content to path, creating parent directories. Returns the absolute path.

    mkstemp creates files owner-only; the final file gets the same mode a plain
    open() would give it, or keeps the mode of the file it replaces.
    """
    target = os.path.abspath(path)
    directory = os.path.dirname(target)
    tmp_path = None
    try:
        os.makedirs(directory, exist_ok=True)
        mode = _file_mode(target)
        fd, tmp_path = tempfile.mkstemp(prefix='.stamp_', dir=directory)
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(content)
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, target)
    except OSError as e:
        logging.error(f"[OUTPUT] Failed to write {target}: {e}")
        if tmp_path is not None and os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise
    logging.info(f"[OUTPUT] Wrote {os.path.basename(target)} ({len(content)} bytes)")
    return target
