"""End-to-end runs of the monte_carlo.py command-line driver."""

from decimal import getcontext

import monte_carlo


def test_generate_default_process(capsys):
    assert monte_carlo.main(["--energy", "1000", "--events", "200", "--seed", "1"]) == 0
    out = capsys.readouterr().out
    assert "Generation Complete" in out
    assert "QED e+e- -> mu+mu-" in out


def test_generate_exact_flat(capsys):
    rc = monte_carlo.main(["--energy", "500", "--events", "25", "--chunk-size", "10",
                           "--process", "flat", "--exact", "--seed", "2"])
    assert rc == 0
    assert "Events returned              : 25 (requested 25)" in capsys.readouterr().out


def test_generate_decimal_scalar(capsys):
    rc = monte_carlo.main(["--energy", "1000", "--events", "5", "--chunk-size", "5",
                           "--precision", "decimal", "--decimal-digits", "30", "--scalar", "--seed", "3"])
    assert rc == 0
    assert "(decimal)" in capsys.readouterr().out


def test_decimal_digits_do_not_leak():
    before = getcontext().prec
    assert monte_carlo.main(["--energy", "1000", "--events", "2", "--chunk-size", "5",
                             "--precision", "decimal", "--decimal-digits", "17", "--seed", "5"]) == 0
    assert getcontext().prec == before


def test_show_kinematics(capsys):
    rc = monte_carlo.main(["--energy", "1000", "--show-kinematics",
                           "--cos-theta", "0.9", "--phi", "0.7853981633974483"])
    assert rc == 0
    out = capsys.readouterr().out
    assert "999.999869" in out
    assert "894.962239" in out
    assert "Four-momentum conserved: True" in out


def test_below_threshold_fails():
    assert monte_carlo.main(["--energy", "50", "--events", "10"]) == 1
    assert monte_carlo.main(["--energy", "50", "--show-kinematics"]) == 1


def test_plot_written(tmp_path, capsys):
    path = tmp_path / "cos_theta.png"
    rc = monte_carlo.main(["--energy", "1000", "--events", "500", "--seed", "4", "--plot", str(path)])
    assert rc == 0
    assert path.exists() and path.stat().st_size > 0
