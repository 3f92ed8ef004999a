from __future__ import annotations

import platform

PROJECT_NAME = "eve-sso"
VERSION = "0.1.0"
HOMEPAGE = "https://pypi.org/project/eve-sso/"


# CCP asks third-party applications to identify themselves, so the default
# carries the library, the runtime and a contact URL.
def build_user_agent() -> str:
    return f"{PROJECT_NAME}@{VERSION} - python@{platform.python_version()} - {HOMEPAGE}"
