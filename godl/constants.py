"""Global constants and default configurations for godl."""

# Global paths will be initialized by core.config
GODL_HOME = None
GODL_CONFIG_FILE = None

BASE_URL = "https://go.dev/dl/"

# Distribution name prefixed to every archive label, e.g. go1.21.3.linux-amd64.tar.gz
DEFAULT_NAME_PREFIX = "go"

# Class attribute marking download links on the listing page
DEFAULT_SELECTOR_CLASS = "download"

# Top-level directory inside every release archive
DEFAULT_ARCHIVE_ROOT = "go"

ARCHIVE_SUFFIXES = ('.tar.gz', '.zip')

REQUEST_TIMEOUT = 30

# Default configuration
DEFAULT_CONFIG = {
    "base_url": BASE_URL,
    "include_release_candidates": False,
    "destination": "",
    "link_name": "",
    "os_override": "",
    "arch_override": "",
    "verbose": False,
}

BOOLEAN_CONFIG_KEYS = ("include_release_candidates", "verbose")

# Environment variables bound to configuration keys
ENV_VARS = {
    "GODL_BASE_URL": "base_url",
    "GODL_INCLUDE_RC": "include_release_candidates",
    "GODL_DESTINATION": "destination",
    "GODL_LINK_NAME": "link_name",
    "GODL_OS": "os_override",
    "GODL_ARCH": "arch_override",
    "GODL_VERBOSE": "verbose",
}

# System name mappings (platform.system() -> listing token)
SYSTEM_MAP = {
    'Darwin': 'darwin',
    'Windows': 'windows',
    'Linux': 'linux',
    'FreeBSD': 'freebsd',
    'OpenBSD': 'openbsd',
    'NetBSD': 'netbsd',
}

# platform.machine() lowercased -> listing token
ARCH_MAP = {
    'x86_64': 'amd64',
    'amd64': 'amd64',
    'x64': 'amd64',
    'aarch64': 'arm64',
    'arm64': 'arm64',
    'i386': '386',
    'i686': '386',
    'x86': '386',
    'armv6l': 'armv6l',
    'armv7l': 'armv6l',
    'ppc64le': 'ppc64le',
    's390x': 's390x',
    'riscv64': 'riscv64',
    'loongarch64': 'loong64',
}
