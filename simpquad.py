#!/usr/bin/env python3
"""
simpquad - Composite Simpson's Rule Quadrature

Convenience entry point. Equivalent to: python -m simpquad
"""

from simpquad.__main__ import main

if __name__ == "__main__":
    main()
