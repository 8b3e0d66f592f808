"""
Logging utilities for game sessions and benchmarks.
"""
from typing import Deque, Dict, Any, Optional
from pathlib import Path
import json
import time
from datetime import datetime
from collections import deque
import numpy as np


def convert_to_serializable(obj):
    """Convert numpy types to Python types for JSON serialization."""
    if isinstance(obj, np.integer):
        return int(obj)
    elif isinstance(obj, np.floating):
        return float(obj)
    elif isinstance(obj, np.bool_):
        return bool(obj)
    elif isinstance(obj, np.ndarray):
        return obj.tolist()
    elif isinstance(obj, dict):
        return {k: convert_to_serializable(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [convert_to_serializable(i) for i in obj]
    return obj


class Logger:
    """
    Appends game events as JSON lines.
    """

    def __init__(self, log_dir: str, name: str = "session"):
        """
        Initialize logger.

        Args:
            log_dir: Directory to save logs
            name: Name of the session
        """
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.name = name
        self.start_time = time.time()

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.log_file = self.log_dir / f"{name}_{timestamp}.jsonl"

        self.step = 0

    def log(self, event: str, data: Dict[str, Any], step: Optional[int] = None) -> None:
        """
        Log one event.

        Args:
            event: Event name (e.g. "lock", "game_over")
            data: Dictionary of event fields
            step: Optional step number
        """
        if step is not None:
            self.step = step
        else:
            self.step += 1

        record = {
            'event': event,
            'step': self.step,
            'time': time.time() - self.start_time,
            'timestamp': datetime.now().isoformat(),
            **data,
        }
        record = convert_to_serializable(record)

        with open(self.log_file, 'a') as f:
            f.write(json.dumps(record) + '\n')

    def print_metrics(self, metrics: Dict[str, Any]) -> None:
        """Print metrics to console."""
        elapsed = time.time() - self.start_time
        minutes = int(elapsed // 60)
        seconds = int(elapsed % 60)

        print(f"\n[{self.name}] [{minutes:02d}:{seconds:02d}]")
        for key, value in metrics.items():
            if isinstance(value, float):
                print(f"  {key}: {value:.4f}")
            else:
                print(f"  {key}: {value}")


class MetricsTracker:
    """
    Rolling window of values per metric, summarised with numpy.

    Only the last window_size values of each metric are kept.
    """

    def __init__(self, window_size: int = 100):
        self.window_size = window_size
        self.metrics: Dict[str, Deque[float]] = {}

    def add(self, name: str, value: float) -> None:
        """Add a value to a metric."""
        if name not in self.metrics:
            self.metrics[name] = deque(maxlen=self.window_size)
        self.metrics[name].append(float(value))

    def get_mean(self, name: str) -> float:
        values = self.metrics.get(name)
        return float(np.mean(values)) if values else 0.0

    def get_max(self, name: str) -> float:
        values = self.metrics.get(name)
        return float(np.max(values)) if values else 0.0

    def get_summary(self, name: str) -> Dict[str, float]:
        """Mean, std, min, max and last value of one metric (zeros if unseen)."""
        values = self.metrics.get(name)
        if not values:
            return {'mean': 0.0, 'std': 0.0, 'min': 0.0, 'max': 0.0, 'last': 0.0}
        arr = np.fromiter(values, dtype=np.float64)
        return {
            'mean': float(arr.mean()),
            'std': float(arr.std()),
            'min': float(arr.min()),
            'max': float(arr.max()),
            'last': float(arr[-1]),
        }

    def get_all_summaries(self) -> Dict[str, Dict[str, float]]:
        """Summaries for every metric seen so far, in insertion order."""
        return {name: self.get_summary(name) for name in self.metrics}
