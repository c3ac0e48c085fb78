import logging
import os
import threading
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse

from prefix_tree import __version__
from prefix_tree.autocomplete import Autocompleter
from prefix_tree.trie import Trie


MAX_LIMIT = int(os.environ.get("PREFIX_TREE_MAX_LIMIT", "100"))
DEFAULT_LIMIT = int(os.environ.get("PREFIX_TREE_DEFAULT_LIMIT", "25"))
MAX_KEY_LENGTH = int(os.environ.get("PREFIX_TREE_MAX_KEY_LENGTH", "256"))

logger = logging.getLogger(__name__)


def _clamp(limit: int) -> int:
    return max(1, min(limit, MAX_LIMIT))


def _require_key(key: Any) -> str:
    if not isinstance(key, str) or not key.strip():
        raise HTTPException(status_code=400, detail="key is required")
    key = key.strip()
    if len(key) > MAX_KEY_LENGTH:
        raise HTTPException(status_code=400, detail=f"key too long (max {MAX_KEY_LENGTH} chars)")
    return key


def create_app(trie: Optional[Trie] = None) -> FastAPI:
    """Build a lookup service around ``trie`` (a fresh one when omitted)."""
    app = FastAPI(title="Prefix Tree Lookup API", version=__version__)
    app.state.trie = trie if trie is not None else Trie()
    app.state.lock = threading.Lock()
    completer = Autocompleter(app.state.trie)

    @app.get("/health")
    def health():
        return {"ok": True, "keys": len(app.state.trie)}

    @app.get("/api/keys")
    def list_keys(prefix: str = "", limit: int = DEFAULT_LIMIT):
        limit = _clamp(limit)
        keys = []
        with app.state.lock:
            for key in app.state.trie.iter_keys(prefix):
                keys.append(key)
                if len(keys) >= limit:
                    break
        return {"prefix": prefix, "count": len(keys), "keys": keys}

    @app.get("/api/suggest")
    def suggest(q: str = "", limit: int = DEFAULT_LIMIT):
        with app.state.lock:
            suggestions = completer.suggest(q, _clamp(limit))
        return {"q": q, "suggestions": suggestions}

    @app.get("/api/keys/{key:path}")
    def get_key(key: str):
        key = _require_key(key)
        with app.state.lock:
            if not app.state.trie.contains(key):
                raise HTTPException(status_code=404, detail="key not found")
            return {"key": key, "value": app.state.trie.get(key)}

    @app.post("/api/keys")
    def insert_key(data: Dict[str, Any]):
        key = _require_key(data.get("key"))
        value = data.get("value")
        with app.state.lock:
            app.state.trie.insert(key, value)
            size = len(app.state.trie)
        logger.info("Inserted key=%s", key)
        return JSONResponse({"key": key, "value": value, "keys": size}, status_code=201)

    @app.put("/api/keys/{key:path}")
    def set_value(key: str, data: Dict[str, Any]):
        key = _require_key(key)
        if "value" not in data:
            raise HTTPException(status_code=400, detail="value is required")
        with app.state.lock:
            updated = app.state.trie.set(key, data["value"])
        if not updated:
            raise HTTPException(status_code=404, detail="key not found")
        return {"key": key, "value": data["value"]}

    @app.delete("/api/keys/{key:path}")
    def delete_key(key: str):
        key = _require_key(key)
        with app.state.lock:
            removed = app.state.trie.remove(key)
            size = len(app.state.trie)
        if not removed:
            raise HTTPException(status_code=404, detail="key not found")
        logger.info("Deleted key=%s", key)
        return {"key": key, "deleted": True, "keys": size}

    return app


def load_words(path: str) -> Trie:
    """Read one key per line from ``path``; blank lines are skipped."""
    trie: Trie = Trie()
    with open(path, encoding="utf-8") as fh:
        trie.insert_all(line.strip() for line in fh if line.strip())
    logger.info("Seeded trie with %d keys from %s", len(trie), path)
    return trie


app = create_app()
