"""Shared test fixtures for the releaser test suite.

config.py: sample releaser.yaml content and loaded ReleaserConfig.
git.py: throwaway git repositories (with commit, empty, with bare remote).
"""
