from setuptools import setup

setup(
    name='id-codec',
    version='1.0',
    description='Reversible, URL-safe obfuscation of record ids for shareable links.',
    python_requires='>=3.9',
    py_modules=[
        'app',
        'checksum',
        'config',
        'core_logic',
        'encoding',
        'metadata',
        'models',
        'obfuscation',
        'router',
        'salt',
        'transcoding',
        'view_details',
    ],
    install_requires=[
        'fastapi',
        'pydantic>=2',
        'slowapi',
        'uvicorn',
    ],
    extras_require={
        'test': ['pytest', 'httpx'],
    },
)
