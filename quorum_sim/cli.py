import argparse
from typing import Optional

from .sim import Simulation, Config


DEFAULT_CFG = Config()


def probability(text: str) -> float:
    value = float(text)
    if not 0.0 <= value <= 1.0:
        raise argparse.ArgumentTypeError(f"{text} is not within [0, 1]")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run the quorum id allocation simulation over a lossy, reordering network.",
    )
    parser.add_argument("--servers", type=int, default=DEFAULT_CFG.servers,
                        help="Number of acceptors (default: %(default)s)")
    parser.add_argument("--clients", type=int, default=DEFAULT_CFG.clients,
                        help="Number of proposers (default: %(default)s)")
    parser.add_argument("--drop-prob", type=probability, default=DEFAULT_CFG.drop_prob,
                        help="Probability that a reply is lost (default: %(default)s)")
    parser.add_argument("--dup-prob", type=probability, default=DEFAULT_CFG.dup_prob,
                        help="Probability that a reply is delivered twice (default: %(default)s)")
    parser.add_argument("--seed", type=int, default=DEFAULT_CFG.seed,
                        help="Seed for the random number generator (default: random)")
    parser.add_argument("--max-steps", type=int, default=DEFAULT_CFG.max_steps,
                        help="Stop after this many deliveries even if messages remain")
    parser.add_argument("--print-every", type=int, default=DEFAULT_CFG.print_every,
                        help="Render participant status every Nth step, 0 to disable (default: %(default)s)")
    parser.add_argument("--log-file", default=DEFAULT_CFG.log_file,
                        help="Detailed log output path (default: %(default)s)")
    parser.add_argument("--no-detailed-log", action="store_true",
                        help="Disable verbose logging to disk")
    return parser


def create_config(args: argparse.Namespace) -> Config:
    return Config(
        servers=args.servers,
        clients=args.clients,
        drop_prob=args.drop_prob,
        dup_prob=args.dup_prob,
        seed=args.seed,
        max_steps=args.max_steps,
        print_every=max(0, args.print_every),
        log_file=args.log_file,
        detailed_log=not args.no_detailed_log,
    )


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.servers < 1:
        parser.error("--servers must be at least 1")
    if args.clients < 0:
        parser.error("--clients cannot be negative")
    cfg = create_config(args)
    sim = Simulation(cfg)
    sim.run()


if __name__ == "__main__":
    main()
