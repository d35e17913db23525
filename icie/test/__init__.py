"""Test runs: verdicts and the HTML test view."""
