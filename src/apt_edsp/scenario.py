"""Models for the EDSP input: a request stanza followed by the package universe."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from .boolean import Bool
from .common.logging_utils import Timer, extra_context, is_debug_enabled
from .constants import Constants
from .errors import FieldDecodeError, MissingFieldError, ScenarioReadError, StanzaReadError
from .kinds import BOOL, DEPENDENCIES, NAMES, STRING, UINT, VERSION, WORDS
from .relations import ArchQualifiedName, Dependency
from .stanza import decode_record, extra_fields, iter_stanzas, stanza_field, write_record
from .version import Version

logger = logging.getLogger(__name__)


@dataclass(kw_only=True)
class Request:
    """The single control stanza opening a scenario."""

    request: str = stanza_field("Request", STRING)
    architecture: str = stanza_field("Architecture", STRING)
    architectures: List[str] = stanza_field("Architectures", WORDS, default_factory=list)

    # Actions
    install: List[ArchQualifiedName] = stanza_field("Install", NAMES, default_factory=list)
    remove: List[ArchQualifiedName] = stanza_field("Remove", NAMES, default_factory=list)
    upgrade: Bool = stanza_field("Upgrade", BOOL, default=Bool.NO)
    dist_upgrade: Bool = stanza_field("Dist-Upgrade", BOOL, default=Bool.NO)
    upgrade_all: Bool = stanza_field("Upgrade-All", BOOL, default=Bool.NO)
    autoremove: Bool = stanza_field("Autoremove", BOOL, default=Bool.NO)

    # Preferences
    strict_pinning: Bool = stanza_field("Strict-Pinning", BOOL, default=Bool.YES)
    forbid_new_install: Bool = stanza_field("Forbid-New-Install", BOOL, default=Bool.NO)
    forbid_remove: Bool = stanza_field("Forbid-Remove", BOOL, default=Bool.NO)
    solver: Optional[str] = stanza_field("Solver", STRING, default=None)
    extra: Dict[str, str] = extra_fields()


@dataclass(kw_only=True)
class Package:
    """One package of the universe, installed or installable."""

    package: str = stanza_field("Package", STRING)
    version: Version = stanza_field("Version", VERSION)
    architecture: str = stanza_field("Architecture", STRING)
    source: Optional[str] = stanza_field("Source", STRING, default=None)
    source_version: Optional[Version] = stanza_field("Source-Version", VERSION, default=None)
    multi_arch: Optional[str] = stanza_field("Multi-Arch", STRING, default=None)
    section: Optional[str] = stanza_field("Section", STRING, default=None)
    priority: Optional[str] = stanza_field("Priority", STRING, default=None)
    essential: Bool = stanza_field("Essential", BOOL, default=Bool.NO)
    installed: Bool = stanza_field("Installed", BOOL, default=Bool.NO)
    id: str = stanza_field("APT-ID", STRING)
    pin: int = stanza_field("APT-Pin", UINT)
    candidate: Bool = stanza_field("APT-Candidate", BOOL, default=Bool.NO)
    automatic: Bool = stanza_field("APT-Automatic", BOOL, default=Bool.NO)

    pre_depends: List[Dependency] = stanza_field("Pre-Depends", DEPENDENCIES, default_factory=list)
    depends: List[Dependency] = stanza_field("Depends", DEPENDENCIES, default_factory=list)
    recommends: List[Dependency] = stanza_field("Recommends", DEPENDENCIES, default_factory=list)
    suggests: List[Dependency] = stanza_field("Suggests", DEPENDENCIES, default_factory=list)
    conflicts: List[Dependency] = stanza_field("Conflicts", DEPENDENCIES, default_factory=list)
    breaks: List[Dependency] = stanza_field("Breaks", DEPENDENCIES, default_factory=list)
    replaces: List[Dependency] = stanza_field("Replaces", DEPENDENCIES, default_factory=list)
    provides: List[Dependency] = stanza_field("Provides", DEPENDENCIES, default_factory=list)

    # Fields APT writes that have no declared meaning here, e.g. APT-Release.
    extra: Dict[str, str] = extra_fields()

    @property
    def name(self) -> ArchQualifiedName:
        """The ``name:arch`` identity of this package."""
        return ArchQualifiedName(self.package, self.architecture)


@dataclass
class Scenario:
    """A complete solver input: the request and the package universe."""

    request: Request
    universe: List[Package] = field(default_factory=list)

    @property
    def packages(self) -> List[Package]:
        return self.universe

    @classmethod
    def read_from(cls, stream: Iterable[Any]) -> "Scenario":
        """Read a scenario stanza by stanza from a text or binary line stream.

        The first stanza is the request, every following one a package.
        Either a complete scenario is returned or ScenarioReadError is raised
        with the zero-based ordinal of the offending stanza.
        """
        logger.info("Parsing scenario...")
        request: Optional[Request] = None
        universe: List[Package] = []
        ordinal = 0
        with Timer() as timer:
            try:
                for stanza in iter_stanzas(stream):
                    if ordinal == 0:
                        request = decode_record(Request, stanza)
                        logger.debug("Parsed request: %r", request)
                    else:
                        universe.append(decode_record(Package, stanza))
                    ordinal += 1
            except (StanzaReadError, MissingFieldError, FieldDecodeError) as exc:
                logger.error("Failed to read scenario stanza %d: %s", ordinal, exc)
                raise ScenarioReadError(ordinal, exc) from exc

        if request is None:
            raise ScenarioReadError(0, StanzaReadError("no request stanza before end of input"))

        logger.debug("Parsed universe with %d packages", len(universe))
        if is_debug_enabled(logger):
            logger.debug(
                "Scenario read",
                extra=extra_context(
                    event="scenario_read",
                    component="scenario",
                    outcome="success",
                    package_count=len(universe),
                    duration_ms=timer.duration_ms(),
                ),
            )
        return cls(request=request, universe=universe)

    def write_to(self, stream: Any) -> None:
        """Write the request and every package as consecutive stanzas."""
        write_record(stream, self.request)
        for package in self.universe:
            write_record(stream, package)

    def find(self, package_id: str) -> Optional[Package]:
        """Return the package with the given ``APT-ID``, if any."""
        for package in self.universe:
            if package.id == package_id:
                return package
        return None


def new_request(architecture: str, **kwargs: Any) -> Request:
    """Build a request carrying the protocol version this library speaks."""
    return Request(request=Constants.PROTOCOL_VERSION, architecture=architecture, **kwargs)
