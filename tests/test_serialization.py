"""
Tests for serialize(), to_array(), to_json() and the pydantic integration.
"""

import json

import pytest
import flagfield
from flagfield import BitField, PermissionsBitField


class Features(BitField):
    Flags = {'Search': 1 << 0, 'Export': 1 << 1, 'Audit': 1 << 2}


class WideFeatures(BitField):
    Flags = {'Low': 1 << 0, 'High': 1 << 60}
    Wide = True


class TestSerialize:
    """Test serialize() and to_array()."""

    def test_serialize_matches_has(self):
        """Test that each serialized entry equals has() for that flag."""
        for value in range(8):
            features = Features(value)
            serialized = features.serialize()

            assert list(serialized) == list(Features.Flags)
            for name in Features.Flags:
                assert serialized[name] == features.has(name)

    def test_serialize_permissions(self):
        """Test serialize() on a permission bitfield."""
        serialized = PermissionsBitField(['ViewChannel', 'SendMessages']).serialize()

        assert serialized['ViewChannel'] is True
        assert serialized['SendMessages'] is True
        assert serialized['ManageGuild'] is False
        assert len(serialized) == len(flagfield.PERMISSION_FLAGS)

    def test_serialize_skips_reverse_lookups(self):
        """Test that numeric keys never show up in the output."""

        class Mirrored(BitField):
            Flags = {'A': 1, '1': 'A', 'B': 2, '2': 'B'}

        assert Mirrored(3).serialize() == {'A': True, 'B': True}

    def test_to_array(self):
        """Test enumeration in registry order."""
        assert Features(['Audit', 'Search']).to_array() == ['Search', 'Audit']
        assert Features().to_array() == []


class TestToJson:
    """Test to_json() and reconstruction."""

    def test_narrow_is_int(self):
        """Test that narrow bitfields serialize as ints."""
        assert Features(['Search', 'Audit']).to_json() == 5

    def test_wide_is_string(self):
        """Test that wide bitfields serialize as decimal strings."""
        assert PermissionsBitField(['ViewChannel', 'SendMessages']).to_json() == '3072'
        assert PermissionsBitField().to_json() == '0'

    @pytest.mark.parametrize('value', [0, 5, 7, flagfield.MAX_SAFE_INTEGER])
    def test_narrow_roundtrip(self, value):
        """Test to_json() then construction for native-range values."""
        assert Features(Features(value).to_json()).bitfield == value

    @pytest.mark.parametrize('value', [
        0,
        0x8,
        PermissionsBitField.All,
        PermissionsBitField.Default,
        (1 << 50) | 1,
    ])
    def test_wide_roundtrip(self, value):
        """Test to_json() then construction for extended-range values."""
        assert PermissionsBitField(PermissionsBitField(value).to_json()).bitfield == value

    def test_wide_roundtrip_through_json(self):
        """Test a round trip through an actual JSON document."""
        original = WideFeatures(['Low', 'High'])

        document = json.dumps({'features': original.to_json()})
        restored = WideFeatures(json.loads(document)['features'])

        assert restored == original
        assert restored.to_array() == ['Low', 'High']


class TestPydantic:
    """Test using bitfields as pydantic model fields."""

    def setup_method(self):
        pydantic = pytest.importorskip('pydantic')

        class Role(pydantic.BaseModel):
            name: str
            permissions: PermissionsBitField

        self.pydantic = pydantic
        self.Role = Role

    def test_validate_from_resolvables(self):
        """Test that any resolvable validates into an instance."""
        for value in (3072, '3072', ['ViewChannel', 'SendMessages'], PermissionsBitField(3072)):
            role = self.Role(name='member', permissions=value)

            assert isinstance(role.permissions, PermissionsBitField)
            assert role.permissions.to_array() == ['ViewChannel', 'SendMessages']

    def test_instance_passes_through(self):
        """Test that an instance is kept as is."""
        perms = PermissionsBitField('Administrator').freeze()

        role = self.Role(name='admin', permissions=perms)

        assert role.permissions is perms

    def test_invalid_input(self):
        """Test that unresolvable input becomes a validation error."""
        with pytest.raises(self.pydantic.ValidationError):
            self.Role(name='member', permissions=['ViewChannel', 'Flying'])
        with pytest.raises(self.pydantic.ValidationError):
            self.Role(name='member', permissions=None)

    def test_json_serialization(self):
        """Test that JSON output uses to_json()."""
        role = self.Role(name='member', permissions=['ViewChannel', 'SendMessages'])

        assert json.loads(role.model_dump_json()) == {'name': 'member', 'permissions': '3072'}
        assert role.model_dump(mode='json')['permissions'] == '3072'

    def test_json_roundtrip(self):
        """Test parsing back the JSON a model produced."""
        role = self.Role(name='mod', permissions=PermissionsBitField.StageModerator)

        restored = self.Role.model_validate_json(role.model_dump_json())

        assert restored.permissions == role.permissions

    def test_json_schema(self):
        """Test that models with bitfield fields produce a JSON schema."""
        schema = self.Role.model_json_schema()
        field = schema['properties']['permissions']

        assert {'type': 'integer', 'minimum': 0} in field['anyOf']
        assert {'type': 'string', 'pattern': '^[0-9]+$'} in field['anyOf']
        names = next(option['enum'] for option in field['anyOf'] if 'enum' in option)
        assert 'ViewChannel' in names
        assert 'ManageEmojisAndStickers' in names
        assert any(option.get('type') == 'array' for option in field['anyOf'])
        assert schema['required'] == ['name', 'permissions']

    def test_serialization_json_schema(self):
        """Test that the output schema matches to_json()."""

        class Plan(self.pydantic.BaseModel):
            features: Features

        role = self.Role.model_json_schema(mode='serialization')
        plan = Plan.model_json_schema(mode='serialization')

        assert role['properties']['permissions']['type'] == 'string'
        assert plan['properties']['features']['type'] == 'integer'
        assert plan['properties']['features']['maximum'] == flagfield.MAX_SAFE_INTEGER

    def test_narrow_field(self):
        """Test a narrow bitfield as a field."""

        class Plan(self.pydantic.BaseModel):
            features: Features

        plan = Plan(features=['Search', 'Export'])

        assert plan.model_dump(mode='json') == {'features': 3}
