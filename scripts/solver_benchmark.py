import sys
import os
import time
import argparse

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_lab.core.board import MazeInvariantError, MazeState
from maze_lab.core.session import GeneratorKind, MazeSession, SolverKind

# ==========================================
# GLOBAL CONFIGURATION
# Add or remove solver slugs here to include/exclude them from the race.
# ==========================================
ENABLED_SOLVERS = [
    "dijkstra",
    "backtracker",
    "astar",
    "deadend",
    "wall-follower",
    # "genetic",  # slow beyond ~10x10
]


def run_benchmark():
    parser = argparse.ArgumentParser(description="Solver Benchmark")
    parser.add_argument("--size", type=int, default=60, help="Board size (cells per side)")
    parser.add_argument("--generator", type=str, default="dfs",
                        choices=[k.slug for k in GeneratorKind], help="Generation algorithm")
    parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    args = parser.parse_args()

    gen_kind = GeneratorKind.from_slug(args.generator)
    print(f"=== MAZE SOLVER BENCHMARK ===")
    print(f"Size: {args.size}x{args.size} | Generator: {gen_kind}")
    print(f"Solvers: {', '.join(ENABLED_SOLVERS)}")
    print("-" * 50)

    # 1. Generate Maze
    t0 = time.time()
    session = MazeSession(args.size, generator_kind=gen_kind, seed=args.seed)
    session.run_generation()
    print(f"Generation Complete in {time.time() - t0:.4f}s.")
    print("-" * 50)

    # 2. Race Loop
    results = []

    for slug in ENABLED_SOLVERS:
        print(f"Running {slug.upper()}...", end="", flush=True)

        # start_solving() clears the previous solver's marks
        session.solver_kind = SolverKind.from_slug(slug)
        session.start_solving()

        t_start = time.time()
        try:
            state = session.run_solver()
        except MazeInvariantError as e:
            print(f" FAILED ({e})")
            results.append({"name": slug, "time": 9999.0, "path": 0, "steps": 0, "status": "Failed"})
            continue
        duration = time.time() - t_start

        status = "Success" if state == MazeState.DONE else "Unsolved"
        print(f" Done ({duration:.4f}s) | Path: {len(session.path)}")
        results.append({
            "name": slug,
            "time": duration,
            "path": len(session.path),
            "steps": session.solver.step_count,
            "status": status,
        })

    # 3. Leaderboard
    print("=" * 60)
    print(f"{'RANK':<5} | {'ALGORITHM':<20} | {'TIME (s)':<10} | {'PATH':<8} | {'STEPS':<8}")
    print("-" * 60)

    # Sort by Time
    results.sort(key=lambda x: x['time'])

    for i, res in enumerate(results):
        print(f"{i+1:<5} | {res['name'].upper():<20} | {res['time']:<10.4f} | {res['path']:<8} | {res['steps']:<8}")
    print("=" * 60)


if __name__ == "__main__":
    run_benchmark()
