"""One-shot MongoDB connectivity diagnostic.

Connects once, lists collections, writes and removes a probe document, then
closes the connection. Errors are logged, never retried.
"""

from __future__ import annotations

import logging
import os
import sys
import threading
import traceback
from typing import Any

from ..common.datetime_utils import now_local
from ..core.constants import PROBE_COLLECTION, URI_PREVIEW_CHARS
from ..core.enums import ConnectionState
from ..core.exceptions import ConnectionProbeError
from .connection import DatabaseConnection
from .mongo_base import db_client

logger = logging.getLogger(__name__)

FATAL_EXIT_CODE = 1


def read_connection_state(client) -> ConnectionState:
    """Ping the server and map the reply to a connection state."""
    reply = client.admin.command("ping")
    if reply and float(reply.get("ok", 0)) == 1.0:
        return ConnectionState.CONNECTED
    return ConnectionState.DISCONNECTED


def describe_error(error: BaseException) -> dict[str, Any]:
    return {
        "name": type(error).__name__,
        "message": str(error),
        "code": getattr(error, "code", None),
        "stack": "".join(traceback.format_exception(type(error), error, error.__traceback__)),
    }


class ConnectivityProbe:
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def run(self) -> bool:
        """Run the diagnostic pass. Returns True when every step succeeded."""
        uri = self._conn_factory.config.uri or ""
        logger.info("Attempting to connect to MongoDB...")
        logger.info("Connection string: %s...", uri[:URI_PREVIEW_CHARS])

        try:
            with db_client(self._conn_factory) as client:
                state = read_connection_state(client)
                if state is not ConnectionState.CONNECTED:
                    logger.info("Connection state: %d", int(state))
                    raise ConnectionProbeError("Failed to establish connection")

                logger.info("MongoDB connection successful!")
                self._exercise(self._conn_factory.database_for(client))
            return True
        except Exception as e:
            logger.error("MongoDB connection error: %s", describe_error(e))
            return False

    def _exercise(self, db) -> None:
        names = db.list_collection_names()
        logger.info("Available collections: %s", names)

        collection = db[PROBE_COLLECTION]
        collection.insert_one({"test": True, "timestamp": now_local()})
        logger.info("Test document inserted successfully")

        collection.delete_one({"test": True})
        logger.info("Test document deleted successfully")


def _terminate(label: str, exc_type, exc_value, exc_tb) -> None:
    logger.critical("%s: %s", label, "".join(traceback.format_exception(exc_type, exc_value, exc_tb)))
    logging.shutdown()
    os._exit(FATAL_EXIT_CODE)


def _uncaught_exception(exc_type, exc_value, exc_tb) -> None:
    _terminate("Uncaught Exception", exc_type, exc_value, exc_tb)


def _unhandled_thread_exception(args) -> None:
    _terminate(
        f"Unhandled exception in thread {getattr(args.thread, 'name', '?')}",
        args.exc_type,
        args.exc_value,
        args.exc_traceback,
    )


_installed = False


def install_process_handlers() -> None:
    """Log and exit(1) on any exception nothing else handled."""
    global _installed
    if _installed:
        return
    sys.excepthook = _uncaught_exception
    threading.excepthook = _unhandled_thread_exception
    _installed = True
