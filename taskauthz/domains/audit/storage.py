"""
Audit trail storage backends.

Every backend implements ``append`` and ``find`` over ``AuditRecord`` and
keeps the persisted field names of ``AuditRecord.to_wire()``.
"""

import asyncio
import fcntl
import json
import logging
import os
import threading
from pathlib import Path
from typing import Any, Dict, List, Protocol, Union

from pydantic import ValidationError

from .exceptions import AuditReadError, AuditWriteError
from .models import AuditQuery, AuditRecord

logger = logging.getLogger(__name__)


class AuditTrail(Protocol):
    """Append-only audit log with a filtered, paginated read path."""

    async def append(self, record: AuditRecord) -> None: ...

    async def find(self, query: AuditQuery) -> List[AuditRecord]: ...


class FileAuditTrail:
    """
    Newline-delimited JSON audit log in a single file.

    Writers are serialized by a process-local lock and an exclusive
    ``flock`` on the file, so records from concurrent threads or processes
    never interleave. Each append is fsynced before it returns. Readers hold
    a shared ``flock`` and only ever see whole, newline-terminated lines.
    """

    def __init__(self, log_path: Union[str, Path]):
        self._log_path = Path(log_path)
        self._lock = threading.Lock()

    @property
    def log_path(self) -> Path:
        return self._log_path

    async def append(self, record: AuditRecord) -> None:
        await asyncio.to_thread(self._append_sync, record)

    async def find(self, query: AuditQuery) -> List[AuditRecord]:
        records = await asyncio.to_thread(self._read_all)
        return query.paginate([r for r in records if query.matches(r)])

    def _append_sync(self, record: AuditRecord) -> None:
        line = json.dumps(record.to_wire(), ensure_ascii=False) + "\n"
        data = line.encode("utf-8")

        with self._lock:
            try:
                self._log_path.parent.mkdir(parents=True, exist_ok=True)
                created = not self._log_path.exists()
                fd = os.open(
                    self._log_path, os.O_WRONLY | os.O_APPEND | os.O_CREAT, 0o640
                )
            except OSError as e:
                raise AuditWriteError(
                    f"Cannot open audit log {self._log_path}: {e}"
                ) from e

            try:
                fcntl.flock(fd, fcntl.LOCK_EX)
                try:
                    view = memoryview(data)
                    while view:
                        written = os.write(fd, view)
                        view = view[written:]
                    os.fsync(fd)
                finally:
                    fcntl.flock(fd, fcntl.LOCK_UN)
            except OSError as e:
                raise AuditWriteError(f"Cannot write to audit log: {e}") from e
            finally:
                os.close(fd)

            if created:
                self._fsync_directory()

    def _fsync_directory(self) -> None:
        # The record itself is already written and fsynced at this point
        try:
            dir_fd = os.open(self._log_path.parent, os.O_RDONLY)
        except OSError as e:
            logger.error(f"Cannot sync audit log directory {self._log_path.parent}: {e}")
            return
        try:
            os.fsync(dir_fd)
        except OSError as e:
            logger.error(f"Cannot sync audit log directory {self._log_path.parent}: {e}")
        finally:
            os.close(dir_fd)

    def _read_all(self) -> List[AuditRecord]:
        try:
            with open(self._log_path, "rb") as fh:
                fcntl.flock(fh.fileno(), fcntl.LOCK_SH)
                try:
                    raw = fh.read()
                finally:
                    fcntl.flock(fh.fileno(), fcntl.LOCK_UN)
        except FileNotFoundError:
            return []
        except OSError as e:
            raise AuditReadError(f"Cannot read audit log {self._log_path}: {e}") from e

        # The last element is either empty or an unterminated partial line
        lines = raw.split(b"\n")[:-1]

        records: List[AuditRecord] = []
        for lineno, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            try:
                records.append(AuditRecord.model_validate(json.loads(line)))
            except (ValueError, ValidationError) as e:
                raise AuditReadError(
                    f"Corrupt audit record at {self._log_path}:{lineno}"
                ) from e
        return records


class PrismaAuditTrail:
    """
    Audit trail stored in the ``AuditLog`` table.

    The autoincrement primary key preserves insertion order.
    """

    def __init__(self, db: Any):
        self.db = db

    async def append(self, record: AuditRecord) -> None:
        data: Dict[str, Any] = {
            "ts": record.timestamp,
            "userId": record.user_id,
            "role": record.role,
            "orgId": record.org_id,
            "action": record.action,
            "entity": record.entity,
            "outcome": record.outcome.value,
        }
        if record.entity_id is not None:
            data["entityId"] = record.entity_id
        if record.reason is not None:
            data["reason"] = record.reason

        try:
            await self.db.auditlog.create(data=data)
        except Exception as e:
            raise AuditWriteError(f"Cannot write audit record: {e}") from e

    async def find(self, query: AuditQuery) -> List[AuditRecord]:
        try:
            rows = await self.db.auditlog.find_many(
                where=self._build_where(query),
                order={"id": "asc"},
                skip=query.offset,
                take=query.limit,
            )
        except Exception as e:
            raise AuditReadError(f"Cannot read audit records: {e}") from e

        try:
            return [self._to_record(row) for row in rows]
        except (ValueError, ValidationError) as e:
            raise AuditReadError("Corrupt audit record in database") from e

    @staticmethod
    def _build_where(query: AuditQuery) -> Dict[str, Any]:
        where: Dict[str, Any] = {}

        ts_filter: Dict[str, Any] = {}
        if query.from_ is not None:
            ts_filter["gte"] = query.from_
        if query.to is not None:
            ts_filter["lte"] = query.to
        if ts_filter:
            where["ts"] = ts_filter

        if query.user_id is not None:
            where["userId"] = query.user_id
        if query.action is not None:
            where["action"] = query.action

        org_filter: Dict[str, Any] = {}
        if query.org_id is not None:
            org_filter["equals"] = query.org_id
        if query.org_scope is not None:
            org_filter["in"] = sorted(query.org_scope)
        if org_filter:
            where["orgId"] = org_filter

        return where

    @staticmethod
    def _to_record(row: Any) -> AuditRecord:
        ts = row.ts if isinstance(row.ts, str) else row.ts.isoformat()
        return AuditRecord(
            ts=ts,
            user_id=row.userId,
            role=row.role,
            org_id=row.orgId,
            action=row.action,
            entity=row.entity,
            entity_id=row.entityId,
            outcome=row.outcome,
            reason=row.reason,
        )
