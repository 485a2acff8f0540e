from dataclasses import fields


class JsonRecord:
    """Mixin mapping dataclass attributes to their persisted JSON keys.

    Attributes are snake_case; the stored documents use camelCase. Keys not
    listed in ``JSON_KEYS`` are stored under the attribute name.
    """

    JSON_KEYS: dict = {}

    @classmethod
    def attribute_names(cls):
        return [f.name for f in fields(cls)]

    @classmethod
    def json_key(cls, attr: str) -> str:
        return cls.JSON_KEYS.get(attr, attr)

    def to_dict(self) -> dict:
        data = {}
        for name in self.attribute_names():
            value = getattr(self, name)
            # Optional fields that were never set stay out of the document
            if value is None:
                continue
            data[self.json_key(name)] = self._dump_value(name, value)
        return data

    @classmethod
    def from_dict(cls, data: dict):
        kwargs = {}
        for name in cls.attribute_names():
            key = cls.json_key(name)
            if key in data:
                kwargs[name] = cls._load_value(name, data[key])
        return cls(**kwargs)

    def _dump_value(self, name, value):
        return value

    @classmethod
    def _load_value(cls, name, value):
        return value
