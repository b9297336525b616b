import importlib

MODULES = [
    'locmatrix.config',
    'locmatrix.container',
    'locmatrix.api.app',
    'locmatrix.services.entity_tree',
    'locmatrix.services.record_store',
    'locmatrix.services.analytics',
]

def test_imports():
    for m in MODULES:
        importlib.import_module(m)
