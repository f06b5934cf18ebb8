"""
Tests for the headless energy trace.
"""

import numpy as np

from springsim.energy import plot_energy, record_energy
from springsim.models import MassOnASpringModel


def test_record_energy_samples():
    model = MassOnASpringModel(device="cpu", verbose=False)
    trace = record_energy(model, steps=100, dt=0.001, every=10)

    assert len(trace['time']) == 11
    np.testing.assert_allclose(trace['time'][-1], 0.1, rtol=1e-6)
    np.testing.assert_allclose(trace['total'], trace['kinetic'] + trace['potential'])
    assert trace['kinetic'][0] == 0.0
    assert trace['kinetic'][-1] > 0.0


def test_plot_energy_writes_file(tmp_path):
    model = MassOnASpringModel(device="cpu", verbose=False)
    trace = record_energy(model, steps=50, dt=0.001, every=5)

    output = tmp_path / "energy.png"
    plot_energy(trace, title="spring", output=str(output))

    assert output.exists()
    assert output.stat().st_size > 0
