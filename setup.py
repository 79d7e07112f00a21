from setuptools import find_packages, setup

package_dir = {"": "code"}

setup(
    name='worldscan',
    version='0.1.0',
    package_dir=package_dir,
    packages=find_packages(where="code"),
    package_data={'worldscan.cfg': ['default.yaml']},
    python_requires='>=3.8',
    install_requires=[
        'numpy',
        'igraph',
        'PyYAML'
    ],
    extras_require={
        'test': [
            'pytest',
            'networkx'
        ]
    },
    entry_points={
        'console_scripts': ['worldscan=worldscan.cli:main']
    }
)
