from setuptools import setup, find_packages

setup(
    name="pathwatcher",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=[
        "click",
        "psutil>=5.9.3",
        "toml",
        "pyobjc-framework-CoreWLAN; sys_platform == 'darwin'",
        "pyobjc-framework-SystemConfiguration; sys_platform == 'darwin'",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "pathwatcher=pathwatcher.cli:cli",
        ],
    },
    python_requires=">=3.10",
    author="PathWatcher Contributors",
    description="Network path monitoring for macOS and Linux",
    long_description="Reports the active network interface and IPv4/IPv6/DNS support, and re-reports on every network change.",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: MacOS",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: System :: Networking",
        "Topic :: System :: Monitoring",
    ],
)
