'''Named registers of interchangeable functions.

A register is a plain dictionary of functions keyed by their names. The
helpers here build, for a given register, a decorator adding functions to it
and two retrievers, so that evaluator parameters such as
``quota_function='droop'`` can be given as strings.
There should normally be no need to use these functions directly.
'''

from typing import Callable, Dict, Union, Tuple


def marker(register: Dict[str, Callable],
           name: str,
           ) -> Callable[[Callable], Callable]:
    '''Build a decorator that adds the function to the register.'''
    def mark_function(func):
        register[func.__name__] = func
        return func
    return mark_function


def getter(register: Dict[str, Callable],
           name: str,
           ) -> Callable[[str], Callable]:
    '''Build a retriever of registered functions by their name.'''
    def get(func_def: str) -> Callable:
        try:
            return register[func_def]
        except KeyError:
            raise KeyError(f'unknown {name}: {func_def}')
    get.__doc__ = f'Return a {name} function by its name.'
    return get


def constructer(register: Dict[str, Callable],
                name: str,
                ) -> Callable[[Union[str, Callable]], Callable]:
    '''Build a retriever that also passes custom callables through.'''
    get = getter(register, name)

    def construct(func_def: Union[str, Callable]) -> Callable:
        return func_def if callable(func_def) else get(func_def)

    construct.__doc__ = (
        f'Return a {name} function by its name, or the callable given.'
    )
    return construct


def register_functions(register: Dict[str, Callable],
                       name: str,
                       ) -> Tuple[Callable, Callable, Callable]:
    '''Construct the marker, getter and constructer functions at one call.'''
    return (
        marker(register, name),
        getter(register, name),
        constructer(register, name),
    )
