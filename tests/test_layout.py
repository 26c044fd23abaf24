import importlib

CORE_MODULES = [
    "osgardenlinux.actuator",
    "osgardenlinux.compiler",
    "osgardenlinux.compiler.provision",
    "osgardenlinux.compiler.reconcile",
    "osgardenlinux.disk_script",
    "osgardenlinux.errors",
    "osgardenlinux.memoryone",
    "osgardenlinux.models",
    "osgardenlinux.observability",
    "osgardenlinux.templates",
]


def test_core_package_layout_modules_importable() -> None:
    for module_name in CORE_MODULES:
        module = importlib.import_module(module_name)
        assert module is not None
