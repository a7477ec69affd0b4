import sys
import os
# Add the project root to Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import math
import numpy as np
from symbolic_printer import ConversionConfig, LogLevel, configure_logging, convert, to_latex

SAMPLES = [
  ("sqrt(50)", math.sqrt(50)),
  ("2*pi", 2 * math.pi),
  ("pi/2 + pi/2", math.pi / 2 + math.pi / 2),
  ("12*cos(pi/6)", 12 * math.cos(math.pi / 6)),
  ("2*pi + 1", 2 * math.pi + 1),
  ("(sqrt(7) + 2)/3", (math.sqrt(7) + 2) / 3),
  ("cbrt(2)", np.cbrt(2)),
  ("345/456", 345 / 456),
  ("0.123456789...", 0.1234567890123456789),
  ("inf", math.inf),
]


def main():
  configure_logging(LogLevel.MINIMAL)
  spaced = ConversionConfig(space_separation=True)

  print(f"{'input':<18} {'compact':<14} {'spaced':<18} latex")
  print("-" * 70)
  for label, value in SAMPLES:
    compact = convert(value)
    wide = convert(value, spaced)
    latex = to_latex(value) if math.isfinite(value) else "-"
    print(f"{label:<18} {compact:<14} {wide:<18} {latex}")

  print("\nPrecision 4:", convert(0.1234567890123456789, precision=4))


if __name__ == "__main__":
  main()
