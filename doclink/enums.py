from enum import Enum


class LinkVisibility(str, Enum):
    viewer = "viewer"
    collaborator = "collaborator"
    inferred = "inferred"


class LookupSource(str, Enum):
    recent = "recent"
    search = "search"
