import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_lab.core.analysis import MazeAnalyzer
from maze_lab.core.board import Board, MazeState
from maze_lab.core.session import GeneratorKind, MazeSession, SolverKind


class TestSession(unittest.TestCase):
    def test_starts_waiting(self):
        session = MazeSession(board_size=6, seed=1)
        self.assertEqual(session.state, MazeState.WAIT)
        self.assertEqual(session.tick(), MazeState.WAIT)
        self.assertEqual(session.path, [])

    def test_generate_by_ticks(self):
        session = MazeSession(board_size=6, generator_kind=GeneratorKind.KRUSKAL,
                              steps_per_frame=3, seed=4)
        session.start_generation()
        ticks = 0
        while session.tick() != MazeState.GENERATION_DONE:
            ticks += 1
            self.assertEqual(session.state, MazeState.GENERATE)
            self.assertLess(ticks, 1000)
        self.assertTrue(MazeAnalyzer.verify(session.board)["is_perfect"])

        # Nothing runs until solving is requested
        self.assertEqual(session.tick(), MazeState.GENERATION_DONE)

    def test_solve_by_ticks(self):
        session = MazeSession(board_size=7, seed=9)
        session.run_generation()
        session.start_solving()
        while session.tick() == MazeState.SOLVE:
            pass
        self.assertEqual(session.state, MazeState.DONE)
        self.assertTrue(MazeAnalyzer.is_valid_path(session.board, session.path))

        # One more tick goes back to waiting
        self.assertEqual(session.tick(), MazeState.WAIT)

    def test_cannot_solve_before_generation(self):
        session = MazeSession(board_size=4, seed=1)
        with self.assertRaises(RuntimeError):
            session.start_solving()

    def test_run_every_solver(self):
        for kind in SolverKind:
            with self.subTest(solver=kind.slug):
                session = MazeSession(board_size=5, generator_kind=GeneratorKind.PRIM,
                                      solver_kind=kind, seed=3)
                steps = session.run_generation()
                self.assertGreater(steps, 0)
                self.assertEqual(session.state, MazeState.GENERATION_DONE)

                if kind is SolverKind.GENETIC:
                    # A few generations only; it is not guaranteed to finish
                    state = session.run_solver(max_steps=3)
                    self.assertIn(state, (MazeState.SOLVE, MazeState.DONE))
                    self.assertIn(session.solver.generation, (1, 2, 3))
                    continue

                self.assertEqual(session.run_solver(), MazeState.DONE)
                self.assertTrue(MazeAnalyzer.is_valid_path(session.board, session.path))

    def test_solving_again_resets_presentation(self):
        session = MazeSession(board_size=6, solver_kind=SolverKind.DIJKSTRA, seed=2)
        session.run_generation()
        session.run_solver()
        self.assertTrue(any(bits & Board.CELL_WEIGHT for bits in session.board.mask))
        walls = [bits & Board.ALL_WALLS for bits in session.board.mask]

        session.start_solving()
        mask = session.board.mask
        # Only the entrance weight of the new solver is left
        self.assertEqual([i for i in range(len(mask)) if mask[i] & Board.CELL_WEIGHT],
                         [session.board.entrance_index])
        self.assertFalse(any(bits & Board.PATH_HORIZONTAL for bits in mask))
        self.assertEqual([bits & Board.ALL_WALLS for bits in mask], walls)
        for i, cell in enumerate(session.board.cells):
            self.assertEqual(bool(mask[i] & Board.CELL_VISITED), cell.visited)

    def test_visited_bits_survive_start_solving(self):
        session = MazeSession(board_size=6, generator_kind=GeneratorKind.KRUSKAL, seed=3)
        session.run_generation()
        session.start_solving()
        mask = session.board.mask
        for i, cell in enumerate(session.board.cells):
            self.assertTrue(cell.visited)
            self.assertTrue(mask[i] & Board.CELL_VISITED, f"cell {i} lost its visited bit")

    def test_no_solver_before_solving(self):
        # START_LEFT / END_RIGHT are the board's own entrance and exit glyphs
        solver_bits = Board.CELL_WEIGHT | Board.CROSSED | (Board.PATH_BITS & ~(Board.START_LEFT | Board.END_RIGHT))
        for kind in SolverKind:
            with self.subTest(solver=kind.slug):
                session = MazeSession(board_size=6, generator_kind=GeneratorKind.KRUSKAL,
                                      solver_kind=kind, seed=3)
                self.assertIsNone(session.solver)
                self.assertFalse(any(bits & solver_bits for bits in session.board.mask))

                session.run_generation()
                self.assertIsNone(session.solver)
                self.assertEqual(session.path, [])
                self.assertFalse(any(bits & solver_bits for bits in session.board.mask))

        session = MazeSession(board_size=6, solver_kind=SolverKind.DIJKSTRA, seed=3)
        session.run_generation()
        session.start_solving()
        self.assertIsNotNone(session.solver)
        self.assertTrue(session.board.mask[session.board.entrance_index] & Board.CELL_WEIGHT)

    def test_start_generation_rebuilds_board(self):
        session = MazeSession(board_size=5, seed=6)
        session.run_generation()
        old = session.board
        session.start_generation()
        self.assertIsNot(session.board, old)
        self.assertEqual(session.state, MazeState.GENERATE)
        self.assertEqual(MazeAnalyzer.passages(session.board), 0)

    def test_invalid_steps_per_frame(self):
        with self.assertRaises(ValueError):
            MazeSession(board_size=4, steps_per_frame=0)


class TestKinds(unittest.TestCase):
    def test_from_slug(self):
        self.assertIs(GeneratorKind.from_slug("wilson"), GeneratorKind.WILSON)
        self.assertIs(SolverKind.from_slug("astar"), SolverKind.A_STAR)
        with self.assertRaises(ValueError):
            GeneratorKind.from_slug("braid")
        with self.assertRaises(ValueError):
            SolverKind.from_slug("bfs")

    def test_labels(self):
        self.assertEqual(str(GeneratorKind.HUNT_AND_KILL), "Hunt and Kill")
        self.assertEqual(str(SolverKind.DEAD_END_FILLING), "Dead-End Filling")
        self.assertEqual(len(GeneratorKind), 11)
        self.assertEqual(len(SolverKind), 6)

    def test_slugs_unique(self):
        self.assertEqual(len({k.slug for k in GeneratorKind}), len(GeneratorKind))
        self.assertEqual(len({k.slug for k in SolverKind}), len(SolverKind))


if __name__ == '__main__':
    unittest.main()
