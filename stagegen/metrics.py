from typing import Any, Dict


def init_metrics() -> Dict[str, Any]:
    return {
        'rooms_placed': 0,
        'rooms_skipped': 0,
        'exit_attempts': 0,
        'exit_distance_met': False,
        'hallways_spanning': 0,
        'branches_added': 0,
        'branches_skipped': 0,
        'hallways_pruned': 0,
        'exit_hallways_removed': 0,
        'spanning_repairs': 0,
        'treasure_promoted': 0,
        'treasure_demoted': 0,
        'runtime_ms': 0,
    }
