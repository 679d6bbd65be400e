from abc import ABC, abstractmethod
from typing import Dict, List, Optional


class BaseFeed(ABC):
    RESULTS_KEY = "results"

    @abstractmethod
    def fetch(self) -> Optional[Dict]:
        """Retorna o payload JSON do provedor ou None em qualquer falha."""

    def fetch_results(self) -> List[Dict]:
        payload = self.fetch()
        if not payload:
            return []
        results = payload.get(self.RESULTS_KEY)
        return results if isinstance(results, list) else []
