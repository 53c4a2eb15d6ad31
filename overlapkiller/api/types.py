from typing import NamedTuple


class Service(NamedTuple):
    ip: str
    name: str
    namespace: str


class Pod(NamedTuple):
    ip: str
    name: str
    namespace: str
