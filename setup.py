from setuptools import setup, find_namespace_packages
import re
from pathlib import Path

_version_re = re.compile(r"^__version__\s*(?::\s*\w+\[?\w*\]?)?\s*=\s*['\"]([^'\"]+)['\"]", re.M)


def file_getVersion(rel_path: str) -> str:
    """
    Retrieve the version string from the specified file.
    """
    version_file = Path(__file__).parent / rel_path
    if not version_file.exists():
        raise RuntimeError(f"Version file {rel_path} not found.")

    with open(version_file, 'r') as f:
        content = f.read()
        match = _version_re.search(content)
        if not match:
            raise RuntimeError(f"Could not find __version__ in {rel_path}")
        return match.group(1)


setup(
    name='replkit',
    version=file_getVersion('replkit/replkit.py'),
    description='A reusable read-dispatch loop for line-oriented interactive tools',
    packages=find_namespace_packages(include=['replkit', 'replkit.*']),
    python_requires='>=3.10',
    install_requires=[
        'prompt_toolkit>=3.0.29',
        'rich',
        'click>=8.0',
        'loguru',
        'pydantic>=2.0',
        'pydantic-settings>=2.0',
        'appdirs',
    ],
    license='MIT',
    entry_points={
        'console_scripts': [
            'replkit = replkit.replkit:main'
        ]
    },
    classifiers=[
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Environment :: Console',
        'Topic :: Software Development :: Libraries :: Application Frameworks',
        'Topic :: Terminals',
    ],
    extras_require={
        'none': [],
        'dev': [
            'pytest~=8.0'
        ]
    }
)
