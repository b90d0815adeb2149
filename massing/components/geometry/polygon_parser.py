from typing import List, Tuple, Any
from abc import ABC, abstractmethod


class IPolygonDataParser(ABC):
    """
    Abstract base class for coordinate list parsers (Strategy Pattern)

    Each parser handles a specific input format and converts it to
    a list of (first, second) coordinate tuples. For geodetic input the
    tuples are (lon, lat), matching GeoJSON ordering.
    """

    @abstractmethod
    def can_parse(self, data: Any) -> bool:
        """
        Check if this parser can handle the given data format

        Args:
            data: Input data to check

        Returns:
            True if parser can handle this format
        """
        pass

    @abstractmethod
    def parse(self, data: Any, parameter_name: str = "polygon") -> List[Tuple[float, float]]:
        """
        Parse data into list of coordinate tuples

        Args:
            data: Input data to parse
            parameter_name: Name used in error messages

        Returns:
            List of coordinate tuples

        Raises:
            ValueError: If data format is invalid
        """
        pass


class DictPolygonParser(IPolygonDataParser):
    """
    Parser for dictionary-based formats: [{"x": 0, "y": 0}, ...] or
    [{"lat": 12.9, "lon": 77.6}, ...]
    """

    # (first key, second key) pairs in priority order
    _KEY_PAIRS = [("x", "y"), ("lon", "lat")]

    def can_parse(self, data: Any) -> bool:
        """Check if data is a list of dictionaries"""
        if not isinstance(data, list) or not data:
            return False
        return isinstance(data[0], dict)

    def parse(self, data: List[dict], parameter_name: str = "polygon") -> List[Tuple[float, float]]:
        """
        Parse dictionary format coordinate data

        Args:
            data: List of dicts with x/y or lon/lat keys
            parameter_name: Name used in error messages

        Returns:
            List of coordinate tuples

        Raises:
            ValueError: If dict format is invalid
        """
        coords = []
        for i, point in enumerate(data):
            if not isinstance(point, dict):
                raise ValueError(
                    f"Parameter '{parameter_name}' point at index {i} is not a dict. "
                    f"Got type: {type(point).__name__}, value: {point}"
                )

            keys = next((pair for pair in self._KEY_PAIRS if pair[0] in point and pair[1] in point), None)
            if keys is None:
                raise ValueError(
                    f"Parameter '{parameter_name}' point at index {i} missing coordinate keys. "
                    f"Got: {point}. Expected format: {{'x': value, 'y': value}} or {{'lat': value, 'lon': value}}"
                )

            try:
                coords.append((float(point[keys[0]]), float(point[keys[1]])))
            except (TypeError, ValueError) as e:
                raise ValueError(
                    f"Parameter '{parameter_name}' point at index {i} has invalid coordinate values. "
                    f"Error: {type(e).__name__}: {str(e)}. "
                    f"Point: {point}"
                )

        return coords


class ListPolygonParser(IPolygonDataParser):
    """
    Parser for list-based format: [[0, 0], [3, 0], ...]
    """

    def can_parse(self, data: Any) -> bool:
        """Check if data is a list of lists/tuples"""
        if not isinstance(data, list) or not data:
            return False
        return isinstance(data[0], (list, tuple))

    def parse(self, data: List[List[float]], parameter_name: str = "polygon") -> List[Tuple[float, float]]:
        """
        Parse list format coordinate data

        Args:
            data: List of lists/tuples like [[0, 0], [3, 0], ...]
            parameter_name: Name used in error messages

        Returns:
            List of coordinate tuples

        Raises:
            ValueError: If list format is invalid
        """
        coords = []
        for i, point in enumerate(data):
            if not isinstance(point, (list, tuple)):
                raise ValueError(
                    f"Parameter '{parameter_name}' point at index {i} is not a list or tuple. "
                    f"Got type: {type(point).__name__}, value: {point}"
                )

            if len(point) < 2:
                raise ValueError(
                    f"Parameter '{parameter_name}' point at index {i} must have at least 2 elements. "
                    f"Got: {point}. Expected format: [x, y]"
                )

            if any(isinstance(c, (list, tuple, dict)) for c in point[:2]):
                raise ValueError(
                    f"Parameter '{parameter_name}' point at index {i} is nested too deeply. "
                    f"Got: {point}. Expected format: [x, y]"
                )

            try:
                coords.append((float(point[0]), float(point[1])))
            except (TypeError, ValueError) as e:
                raise ValueError(
                    f"Parameter '{parameter_name}' point at index {i} has invalid coordinate values. "
                    f"Error: {type(e).__name__}: {str(e)}. "
                    f"Point: {point}"
                )

        return coords


class PolygonParserFactory:
    """
    Factory for creating appropriate coordinate parsers (Factory Pattern)

    Uses Strategy Pattern to select the right parser based on data format.
    """

    # Available parsers in priority order
    _PARSERS = [
        DictPolygonParser(),
        ListPolygonParser(),
    ]

    @classmethod
    def get_parser(cls, data: Any, parameter_name: str = "polygon") -> IPolygonDataParser:
        """
        Get appropriate parser for the given data format

        Args:
            data: Input data to parse
            parameter_name: Name used in error messages

        Returns:
            Parser instance that can handle this data

        Raises:
            ValueError: If no parser can handle the data format
        """
        for parser in cls._PARSERS:
            if parser.can_parse(data):
                return parser

        raise ValueError(
            f"Parameter '{parameter_name}' has unsupported format. "
            f"Got type: {type(data).__name__}, value: {data}. "
            f"Expected formats: [{{'x': val, 'y': val}}, ...], [{{'lat': val, 'lon': val}}, ...] or [[x, y], ...]"
        )

    @classmethod
    def parse(cls, data: Any, parameter_name: str = "polygon") -> List[Tuple[float, float]]:
        """Select a parser and parse data in one step"""
        return cls.get_parser(data, parameter_name).parse(data, parameter_name)
