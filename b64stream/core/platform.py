# SPDX-FileCopyrightText: 2022 B64Stream Team
# SPDX-License-Identifier: Apache-2.0

"""Runtime files and folders."""


# standard libs
import os
import stat

# external libs
from cmdkit.config import Namespace

# public interface
__all__ = ['cwd', 'home', 'root', 'site', 'path', 'default_path', 'file_permissions', 'check_private',
           'ensure_log_dir', ]


cwd = os.getcwd()
home = os.getenv('HOME', os.path.expanduser('~'))
root = hasattr(os, 'getuid') and os.getuid() == 0
site = 'system' if root else 'user'
path = Namespace({
    'system': {
        'log': '/var/log/b64stream',
        'config': '/etc/b64stream.toml'},
    'user': {
        'log': f'{home}/.b64stream/log',
        'config': f'{home}/.b64stream/config.toml'},
    'local': {
        'log': f'{cwd}/.b64stream/log',
        'config': f'{cwd}/.b64stream/config.toml'},
})


default_path = path.system if root else path.user


def ensure_log_dir() -> str:
    """Create the site log directory if needed and return its path."""
    os.makedirs(default_path.log, exist_ok=True)
    return default_path.log


def file_permissions(filepath: str) -> str:
    """File permissions mask as a string."""
    return stat.filemode(os.stat(filepath).st_mode)


def check_private(filepath: str) -> bool:
    """Check that `filepath` has '-rw-------' permissions."""
    return file_permissions(filepath) == '-rw-------'
