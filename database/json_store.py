import copy
import json
import os
import uuid
import datetime
import logging
from config import Config

logger = logging.getLogger(__name__)

TABLES = ('profiles', 'work_days')
METHODS = ('search_read', 'read', 'create', 'write', 'unlink')
WRITE_METHODS = ('create', 'write', 'unlink')


class RecordNotFoundError(LookupError):
    pass


class JsonStoreClient:
    """Row store kept in a single JSON file: ``{table: [row, ...]}``."""

    def __init__(self, path=None):
        self.path = path or Config.DATA_FILE
        self.tables = {name: [] for name in TABLES}
        self._load()

    def _load(self):
        if not os.path.exists(self.path):
            logger.info("Archivo de datos %s no existe, se inicia vacío", self.path)
            return
        with open(self.path, encoding='utf-8') as f:
            data = json.load(f)
        for name in TABLES:
            self.tables[name] = list(data.get(name, []))

    def _save(self):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp_path = f"{self.path}.tmp"
        try:
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(self.tables, f, ensure_ascii=False, indent=2, default=str)
            os.replace(tmp_path, self.path)
        except Exception:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def _table(self, table):
        if table not in self.tables:
            raise ValueError(f"Tabla desconocida: {table}")
        return self.tables[table]

    def execute(self, table, method, *args, **kwargs):
        if method not in METHODS:
            raise ValueError(f"Método no soportado: {method}")
        rows = self._table(table)
        handler = getattr(self, f"_{method}")
        if method not in WRITE_METHODS:
            return handler(rows, *args, **kwargs)

        # Memory must match the file if the save fails
        snapshot = copy.deepcopy(rows)
        try:
            return handler(rows, *args, **kwargs)
        except Exception:
            rows[:] = snapshot
            raise

    @staticmethod
    def _matches(row, domain):
        return all(row.get(key) == value for key, value in domain.items())

    @staticmethod
    def _project(row, fields):
        if not fields:
            return dict(row)
        return {key: row.get(key) for key in ['id', *fields]}

    def _search_read(self, rows, domain=None, fields=None, order=None):
        result = [self._project(row, fields) for row in rows if self._matches(row, domain or {})]
        if order:
            result.sort(key=lambda row: row.get(order))
        return result

    def _read(self, rows, record_id, fields=None):
        for row in rows:
            if row['id'] == record_id:
                return self._project(row, fields)
        raise RecordNotFoundError(record_id)

    def _create(self, rows, vals_list):
        created = []
        now = datetime.datetime.now().isoformat(timespec='seconds')
        for vals in vals_list:
            row = {'id': str(uuid.uuid4()), 'created_at': now, **vals}
            rows.append(row)
            created.append(row['id'])
        self._save()
        return created

    def _write(self, rows, record_id, vals):
        for row in rows:
            if row['id'] == record_id:
                # id and created_at are immutable
                row.update({k: v for k, v in vals.items() if k not in ('id', 'created_at')})
                self._save()
                return True
        raise RecordNotFoundError(record_id)

    def _unlink(self, rows, record_id):
        for index, row in enumerate(rows):
            if row['id'] == record_id:
                del rows[index]
                self._save()
                return True
        raise RecordNotFoundError(record_id)
