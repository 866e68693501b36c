#!/bin/python
"""
Unified entry point for comparing knapsack solvers.

Examples:
    python main.py --items 40 --integral --solver dp --solver bnb
    python main.py --instance cases/real1000.txt --solver greedy --solver genetic --plot-dir plots
"""
from KnapsackLab.benchmark.run import main

if __name__ == "__main__":
    raise SystemExit(main())
