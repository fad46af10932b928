from setuptools import setup

setup(
    name='netbrandes',
    version='0.1.0',
    packages=['netbrandes', 'netbrandes.algos', 'netbrandes.metrics', 'netbrandes.tools'],
    description='Node and edge betweenness centrality for networkX graphs using JIT compiled Brandes accumulation',
    license='GNU AGPLv3',
    python_requires='>=3.9',
    install_requires=[
        'networkx>=2.6',
        'numba>=0.56',
        'numba-progress>=0.0.2',
        'numpy>=1.21',
        'tqdm',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
)
