"""
Physical constants for e+ e- -> mu+ mu-.

Units: MeV (natural units c = 1). Values are plain floats; callers convert them
to the numeric kind they compute in (see eemumu.numeric.convert).
"""

ELECTRON_MASS = 0.51099895000   # MeV
MUON_MASS = 105.6583755         # MeV
ALPHA = 1.0 / 137.035999084     # fine-structure constant

PARTICLE_NAMES = ("e-", "e+", "mu-", "mu+")
