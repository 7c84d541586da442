from setuptools import setup, find_packages

setup(
    name="tabular-rl",
    version="0.1.0",
    description="Finite MDP planning and tabular reinforcement learning",
    packages=find_packages(include=["tabular_rl", "tabular_rl.*"]),
    install_requires=[
        "numpy>=1.24.0",
        "python-dotenv>=1.0.0",
        "tqdm>=4.65.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "value-iteration=tabular_rl.cli:value_iteration_main",
            "policy-iteration=tabular_rl.cli:policy_iteration_main",
            "qlearn=tabular_rl.cli:qlearn_main",
            "td=tabular_rl.cli:td_main",
        ],
    },
    python_requires=">=3.8",
)
