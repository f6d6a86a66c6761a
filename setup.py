# -*- coding: utf-8 -*-
from setuptools import setup


setup(
    name="docker-stats-exporter",
    version="0.1.0",
    packages=["docker_stats_exporter"],
    include_package_data=True,
    install_requires=[
        "docker>=6.1",
        "requests",
        "jinja2>=3.0",
        "prometheus_client",
        "fastapi",
        "uvicorn",
    ],
    extras_require={
        "test": ["pytest", "httpx"]
    },
    entry_points={
        "console_scripts": [
            "docker-stats-exporter = docker_stats_exporter.exporter:main",
        ]
    },
    platforms="linux",
    zip_safe=False,
    description="Prometheus exporter for Docker container resource usage",
    license="Apache-2.0",
    keywords="docker, container, prometheus, metrics, exporter",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Topic :: System :: Monitoring",
        "Environment :: Console",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3 :: Only",
    ],
)
