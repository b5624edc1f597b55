"""
A name-space that refuses to define anything twice.
Unions use it to catch clashing display names,
and named unions use it to look members up by name.
"""

from typing import Generic, Iterable, Optional, TypeVar

T = TypeVar('T')

class AlreadyExists(KeyError): pass

class Layer(Generic[T]):
	""" Lightly enhanced dictionary: It does not like duplicate keys. """
	_locate: dict[str, int]
	_symbol: dict[str, T]

	def __init__(self):
		self._locate, self._symbol = {}, {}

	def __contains__(self, key: str) -> bool:
		return key in self._symbol

	def __len__(self): return len(self._symbol)

	def symbol(self, key: str) -> Optional[T]:
		return self._symbol.get(key)

	def locate(self, key: str) -> int:
		""" Where in the original list was this key first defined? """
		return self._locate[key]

	def mount(self, key:str, position:int, symbol:T) -> T:
		if key in self._locate:
			raise AlreadyExists(key)
		else:
			self._locate[key] = position
			self._symbol[key] = symbol
			return symbol

	def each_key(self) -> Iterable[str]:
		return self._symbol.keys()

	def each_symbol(self) -> Iterable[T]:
		return self._symbol.values()
