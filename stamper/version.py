from pathlib import Path

# Release number of the stamper itself; bump by hand on each tagged release.
__version__ = "0.1.0"

BUILD_PROPERTIES = "build.properties"


def _read_build_stamp() -> str:
    """Returns the versionCode recorded in build.properties next to this module.

    Image builds produce that file with
    `stamper stamp --variant release --output stamper/build.properties`.
    Source checkouts have no such file and get an empty string.
    """
    properties = Path(__file__).with_name(BUILD_PROPERTIES)
    try:
        lines = properties.read_text(encoding="utf-8").splitlines()
    except OSError:
        return ""
    for line in lines:
        key, sep, value = line.partition("=")
        if sep and key.strip() == "versionCode":
            return value.strip()
    return ""


__build__ = _read_build_stamp()


def version_string() -> str:
    """Joins the release number and the build's versionCode, e.g. '0.1.0+20241003'."""
    if not __build__:
        return __version__
    return f"{__version__}+{__build__}"
