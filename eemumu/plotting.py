import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from .processes import ScatteringProcess


def analytic_cos_theta_pdf(process: ScatteringProcess, E_in, cos_theta: np.ndarray) -> np.ndarray:
    """dsigma/dcos_theta at E_in, normalized to unit area on [-1, 1]."""
    E = float(E_in)
    y = np.array([float(process.differential_cross_section(E, float(c))) for c in cos_theta])
    # midpoint rule on a fine grid for the normalization
    grid = np.linspace(-1.0, 1.0, 2001)
    mid = 0.5 * (grid[1:] + grid[:-1])
    norm = np.mean([float(process.differential_cross_section(E, float(c))) for c in mid]) * 2.0
    return y / norm


def plot_cos_theta_distribution(events, process: ScatteringProcess, path, bins: int = 50):
    """Histogram of generated cos_theta against the analytic angular distribution."""
    events = list(events)
    if not events:
        raise ValueError("No events to plot")
    E_in = events[0].energy
    cth = np.array([float(ev.cos_theta) for ev in events], dtype=float)

    x_grid = np.linspace(-1.0, 1.0, 200)
    y = analytic_cos_theta_pdf(process, E_in, x_grid)

    fig, ax = plt.subplots(figsize=(7, 5))
    ax.hist(cth, bins=bins, range=(-1.0, 1.0), density=True, alpha=0.8,
            label=f"eemumu ({len(events)} events)")
    ax.plot(x_grid, y, 'r--', label=process.name)
    ax.set_xlabel(r'$\cos\theta_\mu$')
    ax.set_ylabel('Normalized counts / PDF')
    ax.set_title(rf'$e^+e^- \to \mu^+\mu^-$ at $E_{{in}}$ = {float(E_in):g} MeV')
    ax.grid(alpha=0.3)
    ax.legend()
    fig.tight_layout()
    fig.savefig(path)
    plt.close(fig)
    return path
