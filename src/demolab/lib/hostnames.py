"""
hostnames.py
- Best-effort check that the configured demo hostnames resolve.
- Only name-resolution failures are reported; the services are not expected to be up yet,
  so refused connections and timeouts are ignored. Never aborts the run.
"""

import socket

import requests
from loguru import logger
from urllib3.exceptions import NameResolutionError

from demolab.core.constants import HOSTNAME_KEYS, PROBE_PORT_KEY, PROBE_TIMEOUT


def is_resolution_failure(error):
    """Walk an exception chain looking for a DNS lookup failure."""
    seen = set()
    pending = [error]
    while pending:
        current = pending.pop()
        if current is None or id(current) in seen:
            continue
        seen.add(id(current))
        if isinstance(current, (socket.gaierror, NameResolutionError)):
            return True
        if isinstance(current, BaseException):
            pending.extend([current.__cause__, current.__context__, getattr(current, "reason", None)])
            pending.extend(arg for arg in current.args if isinstance(arg, BaseException))
    return False


def probe(hostname, port, session=None, timeout=PROBE_TIMEOUT):
    """
    Try to reach http://hostname:port/.

    Returns:
        bool: False if the hostname could not be resolved, True otherwise.
    """
    session = session or requests
    try:
        session.get(f"http://{hostname}:{port}/", timeout=timeout)
    except requests.RequestException as e:
        if is_resolution_failure(e):
            return False
        logger.debug(f"[hostnames] {hostname} resolved but is not answering yet: {e}")
    return True


def validate_hostnames(config, session=None):
    """
    Report every configured hostname that cannot be resolved.

    Returns:
        list[str]: The unresolvable hostnames (empty if all resolve).
    """
    port = config.get(PROBE_PORT_KEY) or "80"
    unresolvable = []

    for key in HOSTNAME_KEYS:
        name = config.get(key)
        if not name:
            logger.warning(f"[hostnames] {key} is not set in the .env file, skipping")
            continue
        if not probe(name, port, session=session):
            logger.warning(f"[hostnames] {name} could not be resolved: Please check your hosts file or edit the .env file")
            unresolvable.append(name)

    if not unresolvable:
        logger.debug("[hostnames] All hostnames resolve")
    return unresolvable
