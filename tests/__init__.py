"""
Test suite for ESGenius

Unit tests for materiality scoring, the scenario engine, Monte Carlo
simulation, sensitivity sweeps, session state, configuration and the CLI.
"""
