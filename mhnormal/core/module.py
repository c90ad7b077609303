from typing import Callable, Optional, Dict, Any, get_type_hints, Type, ClassVar
from types import MappingProxyType
import functools
import inspect
import numbers
from dataclasses import dataclass

from prefect import task
from prefect.cache_policies import NO_CACHE


__all__ = [
    "Module",
    "InputSpec",
]

_MISSING = object()


@dataclass
class InputSpec:
    """Specification for a module input.

    Describes the expected type, requirement status, and default value for
    an input to a :class:`Module`. Used by :meth:`Module.set_input` to
    enforce validation and provide defaults.

    Attributes:
        type: Expected Python type for this input.
        required: Whether this input must be explicitly provided.
        default: Default value; `_MISSING` indicates no default provided.
    """
    type: Optional[Type] = None
    required: bool = False
    default: Any = _MISSING  # _MISSING means "no default"


def _matches_type(value: Any, expected: type) -> bool:
    """isinstance check that lets ints stand in for floats and numpy scalars for builtins."""
    if isinstance(value, bool) and expected is not bool:
        return False
    if expected is float:
        return isinstance(value, numbers.Real)
    if expected is int:
        return isinstance(value, numbers.Integral)
    return isinstance(value, expected)


class Module(object):
    """Base class for mhnormal modules.

    Provides dependency injection, input specification, type validation and
    Prefect task wrapping. Each subclass wraps one step of the inference
    (likelihood, sampler, posterior) and can depend on other modules.

    Typical usage:
        1. Subclass :class:`Module` and declare required dependencies via
           the class variable :pyattr:`DEPENDENCIES`.
        2. Define inputs using :meth:`set_input`.
        3. Register computational functions using :meth:`run_func`.
        4. Call registered functions as Prefect tasks.

    Attributes:
        DEPENDENCIES: Names of required dependency modules mapped to the
            type each must be an instance of.
        dependencies: Injected dependency instances.
        inputs: Declared input specifications.
        _run_funcs: Registered computational functions.
    """

    DEPENDENCIES: ClassVar[Dict[str, Type['Module']]] = MappingProxyType({})

    def __init__(self, **dependencies: 'Module'):
        """Initializes the module and validates dependencies.

        Args:
            **dependencies: Dependency modules to inject into this module.

        Raises:
            RuntimeError: If required dependencies are missing or unexpected ones are provided.
            TypeError: If a dependency is not an instance of its declared type.
        """

        missing = [name for name in self.DEPENDENCIES if name not in dependencies]
        if missing:
            raise RuntimeError(f"Missing required dependencies: {missing}")

        unexpected = [name for name in dependencies if name not in self.DEPENDENCIES]
        if unexpected:
            raise RuntimeError(f"Unexpected dependencies provided: {unexpected}")

        for name, dep_instance in dependencies.items():
            expected = self.DEPENDENCIES[name]
            if not isinstance(dep_instance, Module):
                raise TypeError(f"Dependency '{name}' must be Module subclass instance; got {type(dep_instance)}")
            if isinstance(expected, type) and not isinstance(dep_instance, expected):
                raise TypeError(
                    f"Dependency '{name}' must be an instance of {expected.__name__}; "
                    f"got {type(dep_instance).__name__}"
                )

        self.dependencies = dict(dependencies)

        self.inputs: Dict[str, Dict[str, Any]] = {}
        self._run_funcs: Dict[str, Callable] = {}   # Registered run functions

        # Per-run-function input specification (built from signature or overridden)
        self._inputs_for_run: Dict[str, Dict[str, Dict[str, Any]]] = {}

    def set_input(self, **input_defaults):
        """Defines input specifications for the module.

        Each keyword argument specifies either an :class:`InputSpec`
        (for type and requirement) or a simple default value. Inputs set
        before :meth:`run_func` apply to the next registered function.

        Example:
            >>> self.set_input(burnin=InputSpec(type=int, required=True), proposal_scale=1.0)

        Args:
            **input_defaults: Key–value pairs of input names and their specifications.
        """

        staged = self._inputs_for_run.setdefault("_default", {})
        for key, spec in input_defaults.items():
            if isinstance(spec, InputSpec):
                meta = {
                    'type': spec.type,
                    'required': spec.required,
                    'default': spec.default,
                }
            else:
                # plain default only
                meta = {
                    'type': None,
                    'required': False,
                    'default': spec,
                }
            self.inputs[key] = meta
            staged[key] = meta

    def run_func(
            self,
            f: Callable,
            *,
            name: Optional[str] = None,
            ) -> Callable:
        """Registers a computational function as a Prefect task.

        Registered functions become callable attributes of the module
        (e.g., ``module.calculate_posterior(...)``).

        Steps performed on each call:
            1. Validates dependencies and fills input defaults.
            2. Rejects missing and unknown inputs.
            3. Type-checks inputs against the function's annotations.
            4. Injects dependencies the function accepts by name.

        Args:
            f: Function implementing the computation. Parameters named like
                a dependency receive the dependency instance.
            name: Custom function name override.
                Defaults to the original function name.

        Returns:
            Callable: The decorated Prefect task.

        Raises:
            RuntimeError: If a run function with the same name is already registered.
        """

        run_name = name or f.__name__
        sig = inspect.signature(f)

        if run_name in self._run_funcs:
            raise RuntimeError(f"Run function '{run_name}' already registered")

        def _autofill_inputs_from_signature(func: Callable, run_name: str) -> None:
            """Infers input specifications from a function's signature and type hints.

            Dependencies are excluded from input registration, as they are
            injected automatically.
            """
            hints = get_type_hints(func)
            specs: Dict[str, Dict[str, Any]] = {}
            for pname, param in sig.parameters.items():
                if pname == "self":
                    continue
                if pname in self.dependencies:
                    continue

                has_default = (param.default is not inspect.Parameter.empty)
                default_val = param.default if has_default else _MISSING

                ann = hints.get(pname)
                ptype = ann if isinstance(ann, type) else None

                specs[pname] = {'type': ptype, 'required': not has_default, 'default': default_val}

            # merging any staged defaults from set_input() done before run registration
            staged = self._inputs_for_run.pop("_default", None)
            if staged:
                for key, meta in staged.items():
                    merged = dict(specs.get(key, {}))
                    merged.update({k: v for k, v in meta.items() if not (k == 'type' and v is None)})
                    specs[key] = merged

            for key, meta in specs.items():
                self.inputs.setdefault(key, meta)
            self._inputs_for_run[run_name] = specs

        def _ensure_inputs_satisfied(kwargs: Dict[str, Any]) -> Dict[str, Any]:
            """Validates provided inputs and fills missing defaults.

            Raises:
                TypeError: If required inputs are missing or unexpected inputs are given.
            """

            input_specs = self._inputs_for_run.get(run_name, {})
            merged = dict(kwargs)

            for k, meta in input_specs.items():
                if k not in merged and meta.get('default', _MISSING) is not _MISSING:
                    merged[k] = meta['default']

            missing = [k for k, meta in input_specs.items()
                       if k not in merged and meta.get('default', _MISSING) is _MISSING]
            if missing:
                raise TypeError(f"Missing required inputs: {missing}")

            allowed = set(input_specs.keys())
            unknown = [k for k in merged.keys() if k not in allowed]
            if unknown:
                raise TypeError(f"Unknown inputs provided: {unknown}. Declared inputs are: {sorted(allowed)}")

            return merged

        def _ensure_dependencies_available():
            missing = [k for k in self.DEPENDENCIES if k not in self.dependencies]
            if missing:
                raise RuntimeError(
                    f"Missing required dependencies at runtime: {missing}. Available: {list(self.dependencies.keys())}"
                )

        def type_check(kwargs: Dict[str, Any]) -> None:
            """Validates input values against their declared types.

            ``None`` passes for inputs whose default is ``None``.

            Raises:
                TypeError: If an argument fails type validation.
            """
            input_specs = self._inputs_for_run.get(run_name, {})
            for key, value in kwargs.items():
                meta = input_specs.get(key, {})
                expected = meta.get('type')
                if expected is None:
                    continue
                if value is None and meta.get('default', _MISSING) is None:
                    continue
                if not _matches_type(value, expected):
                    raise TypeError(
                        f"Argument '{key}' expected {expected.__name__}; got {type(value).__name__}"
                    )

        _autofill_inputs_from_signature(f, run_name)

        # Prefect binds call arguments against this signature; dependencies are not arguments
        public_sig = sig.replace(
            parameters=[p for p in sig.parameters.values() if p.name not in self.dependencies]
        )

        @functools.wraps(f)
        def wrapper(*args, **kwargs):
            """Executes the registered run function with validation and dependency injection."""
            _ensure_dependencies_available()

            user_kwargs = dict(public_sig.bind_partial(*args, **kwargs).arguments)

            user_kwargs = _ensure_inputs_satisfied(user_kwargs)
            type_check(user_kwargs)

            # dependencies are injected after validation so they aren't treated as unknown inputs
            dep_kwargs = {k: v for k, v in self.dependencies.items() if k in sig.parameters}

            return f(**{**dep_kwargs, **user_kwargs})

        wrapper.__signature__ = public_sig
        pf = task(wrapper, name=run_name, cache_policy=NO_CACHE)

        self._run_funcs[run_name] = pf
        setattr(self, run_name, pf)
        return pf

    def __repr__(self):
        """Return a compact summary representation of the module."""
        return (f"<{type(self).__name__} deps={list(self.dependencies.keys())} "
                f"inputs={list(self.inputs.keys())} run_funcs={list(self._run_funcs.keys())}>")

    def __str__(self):
        """Return a human-readable, multi-line summary of the module configuration."""
        deps = ", ".join(self.dependencies.keys()) or "None"
        inputs = ", ".join(self.inputs.keys()) or "None"
        run_funcs = ", ".join(self._run_funcs.keys()) or "None"
        return f"{type(self).__name__}:\n  Dependencies: {deps}\n  Inputs: {inputs}\n  Run Functions: {run_funcs}"
