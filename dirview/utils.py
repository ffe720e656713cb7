import sys
import os


def get_resource_path(relative_path):
    """
    Get absolute path to resource, works for dev and for frozen builds
    """
    if os.path.isabs(relative_path):
        return relative_path

    if getattr(sys, "frozen", False):
        # PyInstaller: Check _MEIPASS first (internal)
        if hasattr(sys, "_MEIPASS"):
            full_path = os.path.join(sys._MEIPASS, relative_path)
            if os.path.exists(full_path):
                return full_path
        return os.path.join(os.path.dirname(sys.executable), relative_path)

    # User files relative to CWD win over package data.
    if os.path.exists(relative_path):
        return os.path.abspath(relative_path)

    return os.path.join(os.path.dirname(__file__), relative_path)


def safe_name(title):
    return "".join(c if c.isalnum() or c in ("-", "_") else "_" for c in title).strip("_")


def user_storage_path(title, debug=False):
    """Per-user directory where preferences are stored."""
    if sys.platform == "win32":
        base_path = os.environ.get("LOCALAPPDATA", os.path.expanduser("~"))
    else:
        base_path = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))

    name = safe_name(title) or "Dirview"
    if debug:
        name = f"{name}_Dev"
    return os.path.join(base_path, name)


def path_segments(path):
    """
    Split an absolute path into breadcrumb segments, root first.

    >>> path_segments("/home/user")
    [{'name': '/', 'path': '/'}, {'name': 'home', 'path': '/home'}, {'name': 'user', 'path': '/home/user'}]
    """
    path = os.path.abspath(path)
    drive, rest = os.path.splitdrive(path)
    root = drive + os.sep
    segments = [{"name": root, "path": root}]
    current = root
    for part in rest.split(os.sep):
        if not part:
            continue
        current = os.path.join(current, part)
        segments.append({"name": part, "path": current})
    return segments
