"""Release catalog: discovers downloadable archives on a listing page."""
import logging
import re
from dataclasses import dataclass
from html.parser import HTMLParser
from typing import Iterator, List, NamedTuple, Optional, Tuple, Union
from urllib.parse import urljoin, urlparse

import requests

from .. import constants
from ..utils.archive import get_archive_suffix
from ..utils.exceptions import VersionNotFoundError
from . import download
from .platform import Platform, get_platform_info
from .version import VersionTuple, parse_version, sort_versions

logger = logging.getLogger(__name__)

STABLE_VERSION = r"\d{1,2}\.\d{1,3}(\.\d{1,3})?"
RELEASE_CANDIDATE_VERSION = r"\d{1,2}\.\d{1,3}(\.\d{1,3})?(rc\d{1,2})?"
LABEL_TEMPLATE = r"^{name}(?P<version>{version})\.(?P<goos>[^-]+)-(?P<goarch>[^.]+)"

# Elements that never get an end tag
VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "source", "track", "wbr",
})


@dataclass(frozen=True)
class Download:
    """A release archive built for one platform."""
    url: str
    version: str
    platform_os: str
    platform_arch: str
    file_name: str

    @property
    def archive_suffix(self) -> str:
        return get_archive_suffix(self.file_name)

    @property
    def version_tuple(self) -> VersionTuple:
        return parse_version(self.version)

    @property
    def platform(self) -> Platform:
        return Platform(self.platform_os, self.platform_arch)


class LabelMatch(NamedTuple):
    version: str
    goos: str
    goarch: str


class VersionPattern:
    """Extracts version and platform from labels like go1.21.3.linux-amd64.tar.gz."""

    def __init__(self, name_prefix: str = constants.DEFAULT_NAME_PREFIX,
                 include_release_candidates: bool = False):
        self.name_prefix = name_prefix
        self.include_release_candidates = include_release_candidates
        version = RELEASE_CANDIDATE_VERSION if include_release_candidates else STABLE_VERSION
        self.regex = re.compile(LABEL_TEMPLATE.format(name=re.escape(name_prefix), version=version))

    def match(self, label: str) -> Optional[LabelMatch]:
        match = self.regex.match(label)
        if not match:
            return None
        return LabelMatch(match.group("version"), match.group("goos"), match.group("goarch"))

    def __repr__(self) -> str:
        return f"VersionPattern({self.regex.pattern!r})"


class ListingNode(NamedTuple):
    label: str
    href: Optional[str]


class ListingParser(HTMLParser):
    """Collects the text and href of every element carrying a given class."""

    def __init__(self, selector_class: str = constants.DEFAULT_SELECTOR_CLASS):
        super().__init__(convert_charrefs=True)
        self.selector_class = selector_class
        self.nodes: List[ListingNode] = []
        self._tag: Optional[str] = None
        self._depth = 0
        self._href: Optional[str] = None
        self._text: List[str] = []

    def handle_starttag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        if self._tag is not None:
            if tag == self._tag:
                self._depth += 1
            return

        attributes = dict(attrs)
        classes = (attributes.get("class") or "").split()
        if self.selector_class not in classes:
            return
        self._tag = tag
        self._depth = 1
        self._href = attributes.get("href")
        self._text = []
        if tag in VOID_ELEMENTS:
            self._flush()

    def handle_endtag(self, tag: str) -> None:
        if self._tag is None or tag != self._tag:
            return
        self._depth -= 1
        if self._depth == 0:
            self._flush()

    def handle_data(self, data: str) -> None:
        if self._tag is not None:
            self._text.append(data)

    def close(self) -> None:
        super().close()
        if self._tag is not None:
            self._flush()

    def _flush(self) -> None:
        self.nodes.append(ListingNode("".join(self._text).strip(), self._href))
        self._tag = None
        self._href = None
        self._text = []


def parse_listing(markup: Union[str, bytes],
                  selector_class: str = constants.DEFAULT_SELECTOR_CLASS) -> List[ListingNode]:
    """Extract candidate download nodes from listing markup."""
    if isinstance(markup, bytes):
        markup = markup.decode("utf-8", errors="replace")
    parser = ListingParser(selector_class)
    parser.feed(markup)
    parser.close()
    return parser.nodes


@dataclass(frozen=True)
class CatalogConfig:
    """Settings fixed for the lifetime of a Catalog."""
    base_url: str = constants.BASE_URL
    include_release_candidates: bool = False
    platform: Optional[Platform] = None
    name_prefix: str = constants.DEFAULT_NAME_PREFIX
    selector_class: str = constants.DEFAULT_SELECTOR_CLASS
    timeout: int = constants.REQUEST_TIMEOUT


class Catalog:
    """Platform filtered downloads found on one listing, newest first."""

    def __init__(self, config: Optional[CatalogConfig] = None):
        self.config = config or CatalogConfig()
        self.platform = self.config.platform or get_platform_info()
        self.pattern = VersionPattern(self.config.name_prefix, self.config.include_release_candidates)
        self.downloads: List[Download] = []

        parsed = urlparse(self.config.base_url)
        self._link_base = f"{parsed.scheme}://{parsed.netloc}/"

    def query(self, session: Optional[requests.Session] = None) -> List[Download]:
        """Fetch the listing and rebuild the catalog from it."""
        markup = download.fetch_listing(self.config.base_url, timeout=self.config.timeout, session=session)
        return self.discover(markup)

    def discover(self, markup: Union[str, bytes]) -> List[Download]:
        """Rebuild the catalog from raw listing markup.

        Nodes that do not look like a release archive for the configured
        platform are skipped; an empty result is not an error.
        """
        downloads = []
        for node in parse_listing(markup, self.config.selector_class):
            entry = self._to_download(node)
            if entry is not None:
                downloads.append(entry)
        self.downloads = sort_versions(downloads, key=lambda d: d.version)
        logger.debug("catalog holds %d downloads for %s", len(self.downloads), self.platform)
        return self.downloads

    def _to_download(self, node: ListingNode) -> Optional[Download]:
        label = node.label
        if not label.endswith(constants.ARCHIVE_SUFFIXES):
            return None
        match = self.pattern.match(label)
        if match is None:
            logger.debug("skipping %s: label does not match %r", label, self.pattern)
            return None
        if not node.href:
            return None
        if (match.goos, match.goarch) != tuple(self.platform):
            return None

        return Download(
            url=urljoin(self._link_base, node.href),
            version=match.version,
            platform_os=match.goos,
            platform_arch=match.goarch,
            file_name=label,
        )

    def lookup(self, version: str) -> Download:
        """Find the download whose version string equals version exactly.

        Raises:
            VersionNotFoundError: If no download carries that version
        """
        for entry in self.downloads:
            if entry.version == version:
                return entry
        raise VersionNotFoundError(version)

    def versions(self) -> List[str]:
        return [entry.version for entry in self.downloads]

    def __iter__(self) -> Iterator[Download]:
        return iter(self.downloads)

    def __len__(self) -> int:
        return len(self.downloads)
