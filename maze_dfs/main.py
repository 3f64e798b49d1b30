import argparse
import sys
import os
import logging
import time

# Ensure project root is in path so we can import 'maze_dfs' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_dfs.config import MazeConfig


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def add_maze_options(parser: argparse.ArgumentParser):
    parser.add_argument("--width", type=int, default=None, help="Grid width (min 3, default 21)")
    parser.add_argument("--height", type=int, default=None, help="Grid height (min 3, default 15)")
    parser.add_argument("--walls", type=float, default=None, help="Wall probability for interior cells (0.0 - 1.0)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--start", type=int, nargs=2, metavar=("X", "Y"), help="Start cell (default 0 0)")
    parser.add_argument("--goal", type=int, nargs=2, metavar=("X", "Y"), help="Goal cell (default bottom-right)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="DFS Maze: random wall grids solved step by step with depth-first search")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate and print a random wall grid")
    add_maze_options(gen_parser)

    # Solve Command
    solve_parser = subparsers.add_parser("solve", help="Generate a grid and solve it with DFS")
    add_maze_options(solve_parser)
    solve_parser.add_argument("--visual", action="store_true", help="Show visualization")
    solve_parser.add_argument("--record", action="store_true", help="Record video of the visual solve")
    solve_parser.add_argument("--delay", type=float, default=None, help="Seconds between solver steps (visual mode)")
    solve_parser.add_argument("--steps-per-tick", type=int, default=None, help="Max solver steps per frame")
    solve_parser.add_argument("--cell-size", type=float, default=None, help="Cell size in pixels (visual mode)")
    solve_parser.add_argument("--no-map", action="store_true", help="Do not print the text map")

    # Benchmark Command
    bench_parser = subparsers.add_parser("benchmark", help="Time generation and solving for several sizes")
    bench_parser.add_argument("--sizes", type=int, nargs="+", default=[50, 200, 500], help="Square grid sizes")
    bench_parser.add_argument("--walls", type=float, default=0.25, help="Wall probability")
    bench_parser.add_argument("--seed", type=int, default=123, help="Random seed")

    return parser


def run_benchmark(sizes, walls: float, seed: int):
    from maze_dfs.core.session import MazeSession

    print(f"\n{'SIZE':<12} | {'GEN (s)':<10} | {'SOLVE (s)':<10} | {'FOUND':<6} | {'PATH LEN':<10} | {'VISITED':<10}")
    print("-" * 72)

    for size in sizes:
        session = MazeSession(MazeConfig(width=size, height=size, wall_probability=walls, seed=seed,
                                         max_steps_per_tick=10_000))
        t0 = time.time()
        session.generate()
        gen_time = time.time() - t0

        t0 = time.time()
        found = session.run_to_completion()
        solve_time = time.time() - t0

        label = f"{size}x{size}"
        print(f"{label:<12} | {gen_time:<10.4f} | {solve_time:<10.4f} | {str(found):<6} | "
              f"{len(session.path):<10} | {session.solver.visited_count:<10}")


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("maze_dfs")

    if args.command is None:
        parser.print_help()
        return 0

    logger.info(f"Running command: {args.command}")

    from maze_dfs.core.session import MazeSession
    from maze_dfs.core.stats import MazeStats
    from maze_dfs.viz.text import render_text

    if args.command == "generate":
        config = MazeConfig.from_args(args)
        session = MazeSession(config)
        grid = session.generate()

        print(render_text(grid))
        print(MazeStats.format_stats(MazeStats.calculate_stats(grid)))

    elif args.command == "solve":
        config = MazeConfig.from_args(args)
        session = MazeSession(config)
        session.generate()

        if args.visual or args.record:
            logger.info("Visual mode enabled - Opening window...")
            from maze_dfs.viz.renderer import Renderer
            renderer = Renderer(session, record=args.record)
            renderer.init_window()
            renderer.run_loop()

            if session.path:
                logger.info(f"Solution length: {len(session.path)}")
            else:
                logger.info("No solution found (or visualization closed early).")
        else:
            logger.info("Headless solve...")
            found = session.run_to_completion()

            if not args.no_map:
                print(render_text(session.grid))
            print(MazeStats.format_stats(MazeStats.calculate_stats(session.grid)))
            if found:
                print(f"Done. Path Length: {len(session.path)}")
            else:
                print("Done. No path found.")
            return 0 if found else 1

    elif args.command == "benchmark":
        logger.info(f"Running DFS benchmark for sizes {args.sizes}...")
        run_benchmark(args.sizes, args.walls, args.seed)

    return 0


if __name__ == "__main__":
    sys.exit(main())
