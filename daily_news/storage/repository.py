import os, json, tempfile
from threading import Lock
from typing import Dict, List, Optional
from pydantic import ValidationError

from daily_news import config
from daily_news.storage.models import NewsBundle

CACHE_PATH = config.NEWS_CACHE_PATH


class NewsCacheRepository:
    """
    Documento JSON único: { "YYYY-MM-DD": { "global": [...], "tech": [...], "ai": [...] } }.

    Cada escrita relê o arquivo, mescla a data e regrava o documento inteiro
    (last-writer-wins entre processos). Dentro do processo o lock serializa os writes.
    """

    def __init__(self, path: Optional[str] = None):
        self.path: str = path or CACHE_PATH
        self.document: Dict[str, NewsBundle] = {}
        self._lock = Lock()

    def load(self) -> Dict[str, NewsBundle]:
        if not os.path.exists(self.path):
            self.document = {}
            return self.document
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
            if not isinstance(raw, dict):
                raise ValueError(f"top-level is {type(raw).__name__}, expected object")
            self.document = {str(day): NewsBundle.model_validate(bundle) for day, bundle in raw.items()}
        except (OSError, json.JSONDecodeError, ValidationError, ValueError) as e:
            print(f"[WARN] {os.path.basename(self.path)} is empty or corrupted ({e.__class__.__name__}). Starting from scratch.")
            self.document = {}
        return self.document

    def get(self, date: str) -> Optional[NewsBundle]:
        return self.load().get(date)

    def dates(self) -> List[str]:
        return sorted(self.load().keys())

    def put(self, date: str, bundle: NewsBundle) -> None:
        with self._lock:
            document = self.load()
            document[date] = bundle
            self._save(document)

    def _save(self, document: Dict[str, NewsBundle]) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        payload = {day: bundle.to_json() for day, bundle in document.items()}
        # grava em arquivo temporário e troca de uma vez (evita JSON truncado)
        fd, tmp_path = tempfile.mkstemp(prefix=".news-cache-", suffix=".json", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
