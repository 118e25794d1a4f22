"""Fixed demo dataset loaded into the relational store at startup."""

from __future__ import annotations

from typing import NamedTuple


class SeedBusiness(NamedTuple):
    name: str
    industry: str


DEMO_BUSINESSES: tuple[SeedBusiness, ...] = (
    SeedBusiness("Global Tech Solutions", "Technology"),
    SeedBusiness("Apex Industries", "Manufacturing"),
    SeedBusiness("Blue Harbor Logistics", "Logistics"),
    SeedBusiness("Catalyst Consulting", "Consulting"),
    SeedBusiness("Digital Dynamics", "Software Development"),
    SeedBusiness("Eclipse Software", "Software Development"),
    SeedBusiness("Fusion Financial", "Financial Services"),
    SeedBusiness("Green Valley Foods", "Food Production"),
    SeedBusiness("Highland Manufacturing", "Manufacturing"),
    SeedBusiness("Innovation Labs", "Technology"),
    SeedBusiness("Jupiter Electronics", "Electronics"),
    SeedBusiness("Kinetic Energy Corp", "Energy"),
)
