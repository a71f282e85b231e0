import sys

from setuptools import setup

sys.path.insert(0, 'bright')
from _version import __author__, __version__  # noqa: E402

setup(
    name='bright',
    version=__version__,
    license='MIT',
    author=__author__,
    packages=['bright'],
    install_requires=[],
    extras_require={'test': ['pytest', 'pytest-mock']},
    entry_points={'console_scripts': ['bright=bright.__main__:main']},
    description='Smoothly fade the screen backlight brightness on Linux',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'License :: OSI Approved :: MIT License',
        'Operating System :: POSIX :: Linux',
        'Programming Language :: Python :: 3 :: Only'
    ],
    python_requires='>=3.8'
)
