# conservation.py
# Four-momentum conservation checks for lists of FourVector.
#
# Sums run in the numeric kind of the vectors; tolerances are compared against
# absolute differences of the summed components.


def _total(vectors):
    vectors = list(vectors)
    total = vectors[0]
    for v in vectors[1:]:
        total = total + v
    return total


def check_energy_conservation(initial_vectors, final_vectors, tol=1e-6):
    """
    Check conservation of energy for any N-body interaction.

    Parameters
    ----------
    initial_vectors : list of FourVector
        List of incoming particles.
    final_vectors : list of FourVector
        List of outgoing particles.
    tol : float
        Numerical tolerance (default 1e-6).

    Returns
    -------
    bool
        True if |E_initial - E_final| < tol, else False.

    Examples
    --------
    >>> from eemumu.kinematics import FourVector
    >>> p_in = [FourVector(10, 0, 0, 3), FourVector(10, 0, 0, -3)]
    >>> p_out = [FourVector(10, 3, 0, 0), FourVector(10, -3, 0, 0)]
    >>> check_energy_conservation(p_in, p_out)
    True
    """
    return abs(_total(initial_vectors).E - _total(final_vectors).E) < tol


def check_momentum_conservation(initial_vectors, final_vectors, tol=1e-6):
    """
    Check conservation of 3-momentum for any N-body interaction.

    Returns
    -------
    bool
        True if all components (px, py, pz) are conserved within tol.
    """
    pi = _total(initial_vectors)
    pf = _total(final_vectors)
    return (
        abs(pi.px - pf.px) < tol and
        abs(pi.py - pf.py) < tol and
        abs(pi.pz - pf.pz) < tol
    )


def check_conservation(initial_vectors, final_vectors, tol=1e-6):
    """Check full 4-momentum conservation (energy + momentum)."""
    return (
        check_energy_conservation(initial_vectors, final_vectors, tol) and
        check_momentum_conservation(initial_vectors, final_vectors, tol)
    )


def check_energy_momentum(initial_vectors, final_vectors, tol=1e-6):
    """Return diagnostic dict for full 4-momentum conservation.

    Returns dict with deltas for energy and momentum components and a
    boolean 'conserved' key summarizing result within tolerance.
    """
    pi = _total(initial_vectors)
    pf = _total(final_vectors)
    delta = pi - pf
    conserved = all(abs(c) < tol for c in delta.to_tuple())
    return {
        'conserved': conserved,
        'deltaE': delta.E,
        'deltaPx': delta.px,
        'deltaPy': delta.py,
        'deltaPz': delta.pz,
        'E_initial': pi.E,
        'E_final': pf.E
    }


def check_event_kinematics(momenta, tol=1e-6):
    """Diagnostic for a (e-, e+, mu-, mu+) tuple: incoming pair vs outgoing pair."""
    electron, positron, muon, antimuon = momenta
    return check_energy_momentum([electron, positron], [muon, antimuon], tol)

