import argparse
import sys
import os
import logging
import time

# Ensure project root is in path so we can import 'maze_lab' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_lab.core.board import MazeInvariantError, MazeState
from maze_lab.core.session import GeneratorKind, MazeSession, SolverKind, STEPS_PER_FRAME

# Larger boards are only summarized, not drawn as text
TEXT_LIMIT = 40


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Maze Lab: step-wise maze generators and solvers")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    generators = [k.slug for k in GeneratorKind]
    solvers = [k.slug for k in SolverKind]

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate a new maze")
    gen_parser.add_argument("--size", type=int, default=20, help="Board size (cells per side)")
    gen_parser.add_argument("--algo", type=str, default="dfs", choices=generators, help="Generation algorithm")
    gen_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    gen_parser.add_argument("--steps-per-frame", type=int, default=STEPS_PER_FRAME, help="Algorithm steps per frame")
    gen_parser.add_argument("--visual", action="store_true", help="Show visualization")
    gen_parser.add_argument("--record", action="store_true", help="Record video")

    # Solve Command
    solve_parser = subparsers.add_parser("solve", help="Generate a maze, then solve it")
    solve_parser.add_argument("--size", type=int, default=20, help="Board size (cells per side)")
    solve_parser.add_argument("--generator", type=str, default="dfs", choices=generators, help="Generation algorithm")
    solve_parser.add_argument("--algo", type=str, default="dijkstra", choices=solvers, help="Solver algorithm")
    solve_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    solve_parser.add_argument("--max-steps", type=int, default=None, help="Give up after this many solver steps")
    solve_parser.add_argument("--steps-per-frame", type=int, default=STEPS_PER_FRAME, help="Algorithm steps per frame")
    solve_parser.add_argument("--visual", action="store_true", help="Show visualization")
    solve_parser.add_argument("--record", action="store_true", help="Record video")

    # Benchmark Command
    bench_parser = subparsers.add_parser("benchmark", help="Time every generator and solver")
    bench_parser.add_argument("--size", type=int, default=30, help="Benchmark size")
    bench_parser.add_argument("--seed", type=int, default=123, help="Random Seed")
    bench_parser.add_argument("--genetic", action="store_true", help="Include the genetic solver (slow)")

    return parser


def open_window(session: MazeSession, record: bool, name: str):
    from maze_lab.viz.recorder import VideoRecorder
    from maze_lab.viz.renderer import Renderer

    output_file = None
    if record:
        if not os.path.exists("recordings"):
            os.makedirs("recordings")
        output_file = VideoRecorder.default_filename(name)

    renderer = Renderer(session, record=record, output_file=output_file)
    renderer.init_window()
    renderer.run_loop()


def print_board(session: MazeSession, with_path: bool = False):
    from maze_lab.viz.text import render_text
    if session.board_size <= TEXT_LIMIT:
        print(render_text(session.board, session.path if with_path else None))


def cmd_generate(args, logger: logging.Logger) -> int:
    from maze_lab.core.analysis import MazeAnalyzer

    kind = GeneratorKind.from_slug(args.algo)
    session = MazeSession(args.size, generator_kind=kind, steps_per_frame=args.steps_per_frame, seed=args.seed)
    logger.info(f"Generating {args.size}x{args.size} maze with {kind}...")

    if args.visual or args.record:
        session.start_generation()
        open_window(session, args.record, f"gen_{kind.slug}_{args.size}")
        return 0

    t0 = time.time()
    steps = session.run_generation()
    logger.info(f"Generation complete in {time.time() - t0:.4f}s ({steps} steps)")
    logger.info(f"Verify: {MazeAnalyzer.verify(session.board)}")
    logger.info(f"Stats: {MazeAnalyzer.calculate_stats(session.board)}")
    print_board(session)
    return 0


def cmd_solve(args, logger: logging.Logger) -> int:
    gen_kind = GeneratorKind.from_slug(args.generator)
    solver_kind = SolverKind.from_slug(args.algo)
    session = MazeSession(args.size, generator_kind=gen_kind, solver_kind=solver_kind,
                          steps_per_frame=args.steps_per_frame, seed=args.seed)

    logger.info(f"Generating {args.size}x{args.size} maze with {gen_kind}...")
    session.run_generation()
    logger.info(f"Solving with {solver_kind}...")

    if args.visual or args.record:
        session.start_solving()
        open_window(session, args.record, f"solve_{gen_kind.slug}_{solver_kind.slug}_{args.size}")
        return 0

    t0 = time.time()
    try:
        state = session.run_solver(max_steps=args.max_steps)
    except MazeInvariantError as e:
        logger.error(f"Solver failed: {e}")
        return 1

    if state != MazeState.DONE:
        logger.warning(f"No solution after {session.solver.step_count} steps")
        return 2

    logger.info(f"Solved in {time.time() - t0:.4f}s ({session.solver.step_count} steps)")
    print_board(session, with_path=True)
    print(f"\nDone. Path Length: {len(session.path)}")
    return 0


def cmd_benchmark(args, logger: logging.Logger) -> int:
    from maze_lab.core.analysis import MazeAnalyzer

    logger.info(f"Running Benchmark Suite (Size: {args.size}x{args.size})...")
    solver_kinds = [k for k in SolverKind if args.genetic or k is not SolverKind.GENETIC]

    print(f"\n{'GENERATOR':<22} | {'SOLVER':<18} | {'TIME (s)':<10} | {'STEPS':<8} | {'PATH LEN':<8}")
    print("-" * 78)

    for gen_kind in GeneratorKind:
        session = MazeSession(args.size, generator_kind=gen_kind, seed=args.seed)
        t0 = time.time()
        steps = session.run_generation()
        perfect = MazeAnalyzer.verify(session.board)["is_perfect"]
        print(f"{gen_kind.label:<22} | {'(generate)':<18} | {time.time() - t0:<10.4f} | {steps:<8} | "
              f"{'perfect' if perfect else 'NOT PERFECT'}")

        for solver_kind in solver_kinds:
            session.solver_kind = solver_kind
            session.start_solving()
            t0 = time.time()
            try:
                session.run_solver()
                path_len = str(len(session.path))
            except MazeInvariantError as e:
                logger.debug(f"{solver_kind} on {gen_kind}: {e}")
                path_len = "error"
            print(f"{'':<22} | {solver_kind.label:<18} | {time.time() - t0:<10.4f} | "
                  f"{session.solver.step_count:<8} | {path_len:<8}")
    return 0


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("maze_lab")

    if args.command is None:
        parser.print_help()
        return 0

    logger.info(f"Running command: {args.command}")

    if args.command == "generate":
        return cmd_generate(args, logger)
    if args.command == "solve":
        return cmd_solve(args, logger)
    if args.command == "benchmark":
        return cmd_benchmark(args, logger)
    return 0


if __name__ == "__main__":
    sys.exit(main())
