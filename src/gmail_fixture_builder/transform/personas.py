"""Frequency-ranked persona assignment.

Every correspondent address in the corpus is counted, ranked by frequency
(ties broken alphabetically) and bound to a fixed roster of fictitious
personas. The result depends only on the set of records, never on the order
they were loaded in.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence

import structlog

from gmail_fixture_builder.models import Persona, RawRecord
from gmail_fixture_builder.utils import extract_email, name_from_email

logger = structlog.get_logger()


DEFAULT_ROSTER: tuple[Persona, ...] = (
    Persona(name="Sarah Chen", email="sarah.chen@gmail.com", role="sister"),
    Persona(name="David Kumar", email="david.kumar@techcorp.com", role="manager", company="TechCorp"),
    Persona(name="Alex Rivera", email="alex.r@gmail.com", role="best friend"),
    Persona(name="Lisa Thompson", email="lisa.t@techcorp.com", role="colleague", company="TechCorp"),
    Persona(name="Mom", email="mom.wilson@yahoo.com", role="family"),
    Persona(name="Jamie Park", email="jamiepark92@gmail.com", role="friend"),
    Persona(name="Michael Chen", email="m.chen@techcorp.com", role="colleague", company="TechCorp"),
    Persona(name="Emma Davis", email="emma.davis@gmail.com", role="friend"),
    Persona(name="Robert Johnson", email="rjohnson@partnerco.com", role="client", company="PartnerCo"),
    Persona(name="Jessica Lee", email="jlee@techcorp.com", role="colleague", company="TechCorp"),
)

DEFAULT_SERVICE_ADDRESSES: tuple[str, ...] = (
    "notifications@github.com",
    "no-reply@linkedin.com",
    "united@united.com",
    "alerts@mint.com",
)

SYNTHETIC_DOMAIN = "example.com"


def service_persona(address: str) -> Persona:
    """Persona for an automated sender: ``notifications@github.com`` -> ``Github``."""
    domain = address.split("@", 1)[-1]
    return Persona(name=domain.split(".")[0].title(), email=address, role="service")


class PersonaAssigner:
    """Builds the original-address -> Persona map for one run."""

    def __init__(
        self,
        owner_fragment: str,
        *,
        roster: Sequence[Persona] = DEFAULT_ROSTER,
        service_addresses: Iterable[str] = DEFAULT_SERVICE_ADDRESSES,
    ) -> None:
        self._owner_fragment = owner_fragment.lower()
        self._roster = tuple(roster)
        self._service_addresses = frozenset(a.lower() for a in service_addresses)

    def is_owner(self, address: str) -> bool:
        return bool(self._owner_fragment) and self._owner_fragment in address

    def count_addresses(self, records: Iterable[RawRecord]) -> Counter[str]:
        """Count every sender and recipient occurrence, excluding the owner."""
        counts: Counter[str] = Counter()
        for record in records:
            for raw in (record.sender, *record.to, *record.cc, *record.bcc):
                address = extract_email(raw)
                if address and not self.is_owner(address):
                    counts[address] += 1
        return counts

    def rank(self, counts: Counter[str]) -> list[str]:
        """Order addresses by descending count, then ascending address."""
        return sorted(counts, key=lambda address: (-counts[address], address))

    def assign(self, records: Iterable[RawRecord]) -> dict[str, Persona]:
        """Return the persona map for ``records``."""
        counts = self.count_addresses(records)
        personas: dict[str, Persona] = {}

        ranked = [a for a in self.rank(counts) if a not in self._service_addresses]
        for i, address in enumerate(ranked):
            if i < len(self._roster):
                personas[address] = self._roster[i]
            else:
                personas[address] = Persona(
                    name=name_from_email(address),
                    email=f"contact{i}@{SYNTHETIC_DOMAIN}",
                    role="acquaintance",
                )

        for address in sorted(self._service_addresses & counts.keys()):
            personas[address] = service_persona(address)

        logger.info(
            "personas_assigned",
            correspondents=len(counts),
            roster_assigned=min(len(ranked), len(self._roster)),
            services=len(personas) - len(ranked),
        )
        return personas
