from setuptools import setup, find_packages

setup(
    name="sora_clean_desk",
    version="1.0.0",
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.9',
    install_requires=[
        'streamlit>=1.33',
        'pandas',
        'pydantic>=2',
        'python-dotenv',
        'requests'
    ],
    extras_require={
        'test': [
            'pytest'
        ]
    },
)
