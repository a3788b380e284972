"""
Constants shared across pymarkdoc.
"""

import os

# Configuration files looked up in the working directory, in order
CONFIG_FILES = [
    '.pymarkdoc.yml',
    '.pymarkdoc.yaml',
    '.pymarkdoc.toml',
    '.pymarkdoc.json',
]

DEFAULT_CONFIG = {
    'output': '',
    'check': False,
    'embed': False,
    'format': 'github',
    'template': {},
    'template_file': {},
    'header': '',
    'header_file': '',
    'footer': '',
    'footer_file': '',
    'tags': None,
    'include_unexported': False,
    'repository': {
        'url': '',
        'default_branch': '',
        'path': '',
    },
}

# Environment variable holding a flags string used as a fallback for --tags
FLAGS_ENV_VAR = 'PYMARKDOC_FLAGS'

# Environment overrides applied on top of the config file
ENV_OVERRIDES = {
    'PYMARKDOC_OUTPUT': 'output',
    'PYMARKDOC_FORMAT': 'format',
    'PYMARKDOC_CHECK': 'check',
    'PYMARKDOC_EMBED': 'embed',
    'PYMARKDOC_INCLUDE_UNEXPORTED': 'include_unexported',
}

CWD_PATH_PREFIX = '.' + os.sep
PARENT_PATH_PREFIX = '..' + os.sep
RECURSIVE_SUFFIX = os.sep + '...'

# Directory names never descended into when expanding recursive paths
IGNORED_DIRS = ['.git', '.hg', '.svn', '__pycache__']

# Comment directive restricting a module to a set of build tags
BUILD_DIRECTIVE = 'pymarkdoc:build'

EMBED_KEYWORD = 'gomarkdoc:embed'
EMBED_START_MARKER = f'<!-- {EMBED_KEYWORD}:start -->'
EMBED_END_MARKER = f'<!-- {EMBED_KEYWORD}:end -->'

# Permissions for generated files and the folders holding them
FILE_MODE = 0o664
DIR_MODE = 0o755
