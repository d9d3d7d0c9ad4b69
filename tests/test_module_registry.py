import pytest

from coursehub_web.core.module_registry import DEFAULT_MODULES


@pytest.mark.parametrize('module', DEFAULT_MODULES, ids=lambda module: module.import_path)
def test_module_packages_expose_init_hook(module):
    package = module.load_module()

    assert callable(getattr(package, 'init_module', None))
    # pytest would call a package-level setup_module as an xunit fixture
    assert not hasattr(package, 'setup_module')


def test_every_module_blueprint_is_registered(app):
    for module in DEFAULT_MODULES:
        assert module.load_blueprint().name in app.blueprints
