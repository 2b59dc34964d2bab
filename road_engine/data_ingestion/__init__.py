"""Adapters that turn external forecast data into engine inputs."""
