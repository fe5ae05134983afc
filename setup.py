from setuptools import setup, find_packages

setup(
    name="ipupdater",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=[
        "click",
        "toml",
        "pyobjc-framework-SystemConfiguration; sys_platform == 'darwin'",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "ipupdater=ipupdater.cli:cli",
            "ipupdater-agent=ipupdater.agent:main",
        ],
    },
    python_requires=">=3.9",
    author="IP Updater Contributors",
    description="Email notifications when your Mac's private IP address changes",
    long_description="A launchd-triggered macOS agent that emails the current Wi-Fi private IP address to a list of recipients whenever it changes.",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: MacOS X",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: MacOS",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: System :: Networking",
        "Topic :: System :: Monitoring",
    ],
)
