from collections import OrderedDict
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple
import logging

from core.models import StepSnapshot

logger = logging.getLogger(__name__)


class RunHistory:
    """In-memory record of finished runs, oldest evicted first"""

    def __init__(self, max_runs: int = 20):
        self.max_runs = max_runs
        self.memory_store: "OrderedDict[str, Dict[str, Any]]" = OrderedDict()
        logger.info(f"Using in-memory run history (max {max_runs} runs)")

    def save_run(self, run_id: str, snapshots: Sequence[StepSnapshot]) -> None:
        """Record the snapshots of a finished run"""
        if not snapshots:
            raise ValueError(f"Run {run_id} has no snapshots to record")
        self.memory_store[run_id] = {
            'kind': snapshots[0].kind,
            'snapshots': tuple(snapshots),
            'recorded_at': datetime.now(),
        }
        self.memory_store.move_to_end(run_id)
        while len(self.memory_store) > self.max_runs:
            evicted, _ = self.memory_store.popitem(last=False)
            logger.debug(f"Evicted run {evicted} from history")
        logger.debug(f"Saved run {run_id} with {len(snapshots)} snapshots")

    def load_run(self, run_id: str) -> Optional[Tuple[StepSnapshot, ...]]:
        """Snapshots of a recorded run, or None"""
        entry = self.memory_store.get(run_id)
        return entry['snapshots'] if entry else None

    def delete_run(self, run_id: str) -> bool:
        removed = self.memory_store.pop(run_id, None) is not None
        if removed:
            logger.debug(f"Deleted run {run_id}")
        return removed

    def list_runs(self) -> List[str]:
        """Recorded run ids, oldest first"""
        return list(self.memory_store)

    def get_run_info(self, run_id: str) -> Optional[Dict[str, Any]]:
        """Summary of a run without its snapshots"""
        entry = self.memory_store.get(run_id)
        if not entry:
            return None
        last = entry['snapshots'][-1]
        return {
            'run_id': run_id,
            'kind': entry['kind'].value,
            'steps': len(entry['snapshots']),
            'outcome': last.outcome.value if last.outcome else None,
            'recorded_at': entry['recorded_at'],
        }

    def clear(self) -> int:
        count = len(self.memory_store)
        self.memory_store.clear()
        return count

    def __len__(self) -> int:
        return len(self.memory_store)
