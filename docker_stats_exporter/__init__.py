"""Prometheus exporter for Docker container resource usage"""
