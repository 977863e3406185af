import json
from collections.abc import Mapping
from types import MappingProxyType

from .errors import ConfigurationError
from .models import Option
from .utils import log

# --- Built-in State -> Cities Table ---
DEFAULT_STATE_CITIES = {
    'California': ['Los Angeles', 'San Francisco', 'San Diego'],
    'Texas': ['Houston', 'Dallas', 'Austin'],
    'Florida': ['Miami', 'Orlando', 'Tampa'],
    'New York': ['New York City', 'Buffalo', 'Albany'],
}


class LookupTable:
    """
    Static mapping from a state to its ordered list of cities.

    The table is checked once when it is built and cannot be changed
    afterwards. A malformed table raises ConfigurationError.
    """

    def __init__(self, mapping):
        if not isinstance(mapping, Mapping):
            raise ConfigurationError(
                f"Lookup table must be a mapping of state -> cities, got {type(mapping).__name__}"
            )

        table = {}
        for state, cities in mapping.items():
            if not isinstance(state, str) or not state.strip():
                raise ConfigurationError(f"Invalid state name: {state!r}")
            if isinstance(cities, (str, bytes)) or not isinstance(cities, (list, tuple)):
                raise ConfigurationError(f"Cities for '{state}' must be a list of names")

            seen = set()
            for city in cities:
                if not isinstance(city, str) or not city.strip():
                    raise ConfigurationError(f"Invalid city name for '{state}': {city!r}")
                if city in seen:
                    raise ConfigurationError(f"Duplicate city '{city}' in '{state}'")
                seen.add(city)
            table[state] = tuple(cities)

        self._table = MappingProxyType(table)

    @classmethod
    def default(cls):
        return cls(DEFAULT_STATE_CITIES)

    @property
    def states(self):
        """State names in configured order."""
        return tuple(self._table)

    def cities_of(self, state):
        """Cities for one state. Unknown states have none."""
        return self._table.get(state, ())

    def cities_for(self, states):
        """
        Union of the cities of every given state.

        States are walked in the given order and each state's cities in
        configured order; a city already seen is skipped. Unknown state
        names contribute nothing.
        """
        result = []
        seen = set()
        for state in states:
            for city in self.cities_of(state):
                if city not in seen:
                    seen.add(city)
                    result.append(city)
        return result

    def state_options(self):
        return [Option(state) for state in self._table]

    def city_options(self, states):
        return [Option(city) for city in self.cities_for(states)]

    def __contains__(self, state):
        return state in self._table

    def __len__(self):
        return len(self._table)

    def __repr__(self):
        return f'<LookupTable {len(self._table)} states>'


def load_lookup_table(path=None):
    """
    Loads the lookup table from a JSON file, or the built-in table when
    no path is given.
    """
    if not path:
        log("Using built-in state/city table.")
        return LookupTable.default()

    try:
        with open(path, encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Locations file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Locations file is not valid JSON: {path}: {e}") from e

    table = LookupTable(data)
    log(f"Loaded {len(table)} states from {path}")
    return table
