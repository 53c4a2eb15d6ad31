from typing import NamedTuple

from overlapkiller.api.types import Pod, Service

# clusterIP of a headless service
_HEADLESS_IP = "None"


class Overlap(NamedTuple):
    service: Service
    pod: Pod

    def __str__(self):
        return (
            f"{self.service.namespace}/service/{self.service.name} and "
            f"{self.pod.namespace}/pod/{self.pod.name} overlap ({self.pod.ip})"
        )


def _has_ip(ip):
    return bool(ip) and ip != _HEADLESS_IP


class ServiceIPIndex:
    """
    Maps a virtual IP to the service holding it.

    Built from one listing and thrown away afterwards. Services without an IP are
    skipped. If two services share an IP, the later one wins.
    """

    def __init__(self, services=()):
        self._services = {}
        for service in services:
            self.add(service)

    def add(self, service):
        if _has_ip(service.ip):
            self._services[service.ip] = service

    def get(self, ip):
        if not _has_ip(ip):
            return None
        return self._services.get(ip)

    def __len__(self):
        return len(self._services)


def find_overlaps(index, pods):
    overlaps = []
    for pod in pods:
        service = index.get(pod.ip)
        if service is not None:
            overlaps.append(Overlap(service, pod))
    return overlaps
