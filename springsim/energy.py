#!/usr/bin/env python3
"""
Headless energy trace for one topology.

Runs a model for a fixed number of steps, records kinetic, potential and
total energy, and plots them with matplotlib.

Usage:
    python -m springsim.energy --topology chain --steps 5000
    python -m springsim.energy --topology spring --output spring_energy.png
"""

import argparse
from typing import Dict

import numpy as np

from .config import load_configs
from .driver import TOPOLOGIES, create_model
from .sim import Model


def record_energy(model: Model, steps: int, dt: float, every: int = 10) -> Dict[str, np.ndarray]:
    """
    Step ``model`` and sample its energy every ``every`` steps.

    Returns:
        Dict with 'time', 'kinetic', 'potential', 'total' arrays
    """
    samples = {'time': [], 'kinetic': [], 'potential': []}

    def sample():
        samples['time'].append(model.t)
        samples['kinetic'].append(model.kinetic_energy())
        samples['potential'].append(model.potential_energy())

    sample()
    for k in range(1, steps + 1):
        model.step(dt)
        if k % every == 0:
            sample()

    trace = {key: np.array(values) for key, values in samples.items()}
    trace['total'] = trace['kinetic'] + trace['potential']
    return trace


def plot_energy(trace: Dict[str, np.ndarray], title: str = "", output: str = None):
    import matplotlib
    if output:
        matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(10, 5))
    ax.plot(trace['time'], trace['kinetic'], label='Kinetic')
    ax.plot(trace['time'], trace['potential'], label='Potential')
    ax.plot(trace['time'], trace['total'], 'k', linewidth=2, label='Total')
    ax.set_xlabel('Time (s)')
    ax.set_ylabel('Energy (J)')
    ax.set_title(title)
    ax.legend()
    ax.grid(True, alpha=0.3)
    fig.tight_layout()

    if output:
        fig.savefig(output, dpi=150)
        print(f"✓ Saved plot to {output}")
    else:
        plt.show()
    return fig


def main(argv=None):
    parser = argparse.ArgumentParser(description='Plot the energy of a mass-spring model over time')
    parser.add_argument('--topology', '-m', choices=sorted(TOPOLOGIES), default='chain')
    parser.add_argument('--steps', '-n', type=int, default=5000)
    parser.add_argument('--dt', type=float, default=0.001)
    parser.add_argument('--every', type=int, default=10, help='Sample interval in steps')
    parser.add_argument('--device', default=None)
    parser.add_argument('--config', default=None, help='JSON file with per-topology overrides')
    parser.add_argument('--output', '-o', default=None, help='Save to file instead of showing')
    args = parser.parse_args(argv)

    configs = load_configs(args.config) if args.config else {}
    model = create_model(args.topology, configs.get(args.topology), device=args.device)

    print(f"Running {args.steps} steps at dt={args.dt}...")
    trace = record_energy(model, args.steps, args.dt, every=args.every)

    print(f"  Initial total energy: {trace['total'][0]:.4f}")
    print(f"  Final total energy:   {trace['total'][-1]:.4f}")

    plot_energy(trace, title=f"{model.display_name}: energy", output=args.output)


if __name__ == "__main__":
    main()
