"""Tests for the Frigidaire AC climate entity."""

from datetime import timedelta
from unittest.mock import Mock

import pytest
from homeassistant.components.climate import HVACAction, HVACMode
from homeassistant.components.climate.const import (
    FAN_AUTO,
    FAN_HIGH,
    FAN_LOW,
    FAN_MEDIUM,
    PRESET_ECO,
    PRESET_NONE,
)
from homeassistant.const import ATTR_TEMPERATURE, UnitOfTemperature

from custom_components.frigidaire_ac.binding import FrigidaireAccessory
from custom_components.frigidaire_ac.climate import (
    FrigidaireClimateEntity,
    async_setup_entry,
)
from custom_components.frigidaire_ac.const import (
    CAPABILITY_PROFILES,
    CELSIUS,
    DOMAIN,
    FANMODE_AUTO,
    FANMODE_MED,
    MAX_TARGET_TEMP_C,
    MIN_TARGET_TEMP_C,
    MODE_COOL,
    MODE_ECON,
    MODE_FAN,
    MODE_OFF,
    PROFILE_FAN_SERVICE,
)
from custom_components.frigidaire_ac.models import (
    DeviceDescriptor,
    DevicePower,
    FanTargetState,
    TargetMode,
    TemperatureUnit,
)

from .conftest import SERIAL, FakeDeviceClient

MIN_TEMP_F = 60.0
MAX_TEMP_F = 90.0


@pytest.fixture
def entity(accessory: FrigidaireAccessory) -> FrigidaireClimateEntity:
    """Create a climate entity on the classic accessory."""
    return FrigidaireClimateEntity(accessory)


@pytest.fixture
def fan_accessory(
    mock_hass: Mock, client: FakeDeviceClient, descriptor: DeviceDescriptor
) -> FrigidaireAccessory:
    """Create an accessory with a separate fan service."""
    return FrigidaireAccessory(
        mock_hass,
        client,
        descriptor,
        CAPABILITY_PROFILES[PROFILE_FAN_SERVICE],
        polling_interval=timedelta(seconds=10),
        grace=0,
    )


@pytest.fixture
def fan_entity(fan_accessory: FrigidaireAccessory) -> FrigidaireClimateEntity:
    """Create a climate entity on the fan service accessory."""
    return FrigidaireClimateEntity(fan_accessory)


class TestAsyncSetupEntry:
    """Tests for async_setup_entry function."""

    @pytest.mark.asyncio
    async def test_async_setup_entry_creates_entity_per_accessory(
        self, mock_hass: Mock, accessory: FrigidaireAccessory
    ) -> None:
        entry = Mock()
        entry.entry_id = "test_entry"
        mock_hass.data[DOMAIN] = {"test_entry": {"accessories": {SERIAL: accessory}}}
        async_add_entities = Mock()

        await async_setup_entry(mock_hass, entry, async_add_entities)

        async_add_entities.assert_called_once()
        entities = async_add_entities.call_args[0][0]
        assert len(entities) == 1
        assert isinstance(entities[0], FrigidaireClimateEntity)


class TestFrigidaireClimateEntityInit:
    """Tests for FrigidaireClimateEntity initialization."""

    def test_init_sets_attributes(self, entity: FrigidaireClimateEntity) -> None:
        assert entity.unique_id == SERIAL
        assert entity.hvac_modes == [HVACMode.OFF, HVACMode.COOL]
        assert entity.fan_modes == [FAN_AUTO, FAN_LOW, FAN_MEDIUM, FAN_HIGH]
        assert entity.preset_modes == [PRESET_NONE, PRESET_ECO]
        assert entity.hvac_mode == HVACMode.OFF
        assert entity.hvac_action == HVACAction.OFF
        assert entity.preset_mode == PRESET_ECO
        assert entity.fan_mode == FAN_AUTO

    def test_fan_service_adds_fan_only_mode(
        self, fan_entity: FrigidaireClimateEntity
    ) -> None:
        assert HVACMode.FAN_ONLY in fan_entity.hvac_modes

    def test_device_info(self, entity: FrigidaireClimateEntity) -> None:
        device_info = entity.device_info
        assert device_info["identifiers"] == {(DOMAIN, SERIAL)}
        assert device_info["manufacturer"] == "Frigidaire"
        assert device_info["model"] == "FHWW083WBE"
        assert device_info["sw_version"] == "1.2.3"


class TestFrigidaireClimateEntityTemperatures:
    """Tests for temperatures in the display unit."""

    def test_fahrenheit_display(
        self, entity: FrigidaireClimateEntity, accessory: FrigidaireAccessory
    ) -> None:
        accessory.cache.set("target_temperature_raw", 68.0)
        assert entity.temperature_unit == UnitOfTemperature.FAHRENHEIT
        assert entity.target_temperature == 68.0
        assert entity.min_temp == MIN_TEMP_F
        assert entity.max_temp == MAX_TEMP_F
        assert entity.target_temperature_step == 1.0

    def test_celsius_display(
        self, entity: FrigidaireClimateEntity, accessory: FrigidaireAccessory
    ) -> None:
        accessory.cache.set("display_unit", TemperatureUnit.CELSIUS)
        accessory.cache.set("target_temperature_raw", 68.0)
        accessory.cache.set("current_temperature_raw", 77.0)
        assert entity.temperature_unit == UnitOfTemperature.CELSIUS
        assert entity.target_temperature == 20.0
        assert entity.current_temperature == 25.0
        assert entity.min_temp == MIN_TARGET_TEMP_C
        assert entity.max_temp == MAX_TARGET_TEMP_C

    @pytest.mark.asyncio
    async def test_set_temperature_in_fahrenheit(
        self, client: FakeDeviceClient, entity: FrigidaireClimateEntity
    ) -> None:
        await entity.async_set_temperature(**{ATTR_TEMPERATURE: 68})
        assert client.writes[0][0] == "temperature"
        assert client.writes[0][2] == pytest.approx(68.0)

    @pytest.mark.asyncio
    async def test_set_temperature_in_celsius(
        self,
        client: FakeDeviceClient,
        entity: FrigidaireClimateEntity,
        accessory: FrigidaireAccessory,
    ) -> None:
        accessory.cache.set("display_unit", TemperatureUnit.CELSIUS)
        await entity.async_set_temperature(**{ATTR_TEMPERATURE: 20})
        assert client.writes[0][2] == pytest.approx(68.0)

    @pytest.mark.asyncio
    async def test_set_temperature_without_value(
        self, client: FakeDeviceClient, entity: FrigidaireClimateEntity
    ) -> None:
        await entity.async_set_temperature()
        assert client.writes == []


class TestFrigidaireClimateEntityModes:
    """Tests for hvac modes and presets."""

    def test_eco_is_cool_with_eco_preset(
        self, entity: FrigidaireClimateEntity, accessory: FrigidaireAccessory
    ) -> None:
        accessory.cache.set("power", DevicePower.ECO)
        assert entity.hvac_mode == HVACMode.COOL
        assert entity.hvac_action == HVACAction.COOLING
        assert entity.preset_mode == PRESET_ECO

    def test_fan_only(
        self, fan_entity: FrigidaireClimateEntity, fan_accessory: FrigidaireAccessory
    ) -> None:
        fan_accessory.cache.set("power", DevicePower.FAN_ONLY)
        assert fan_entity.hvac_mode == HVACMode.FAN_ONLY
        assert fan_entity.hvac_action == HVACAction.FAN

    @pytest.mark.asyncio
    async def test_set_cool_activates_with_eco_intent(
        self, client: FakeDeviceClient, entity: FrigidaireClimateEntity
    ) -> None:
        await entity.async_set_hvac_mode(HVACMode.COOL)
        assert client.writes == [("mode", SERIAL, MODE_ECON)]

    @pytest.mark.asyncio
    async def test_set_off(
        self,
        client: FakeDeviceClient,
        entity: FrigidaireClimateEntity,
        accessory: FrigidaireAccessory,
    ) -> None:
        accessory.cache.set("power", DevicePower.COOLING)
        await entity.async_turn_off()
        assert client.writes == [("mode", SERIAL, MODE_OFF)]

    @pytest.mark.asyncio
    async def test_set_fan_only(
        self, client: FakeDeviceClient, fan_entity: FrigidaireClimateEntity
    ) -> None:
        await fan_entity.async_set_hvac_mode(HVACMode.FAN_ONLY)
        assert client.writes == [("mode", SERIAL, MODE_FAN)]

    @pytest.mark.asyncio
    async def test_set_off_while_fan_only(
        self,
        client: FakeDeviceClient,
        entity: FrigidaireClimateEntity,
        accessory: FrigidaireAccessory,
    ) -> None:
        client.values["mode"] = MODE_FAN
        await accessory.binding.status.refresh_mode()

        await entity.async_set_hvac_mode(HVACMode.OFF)

        assert client.writes == [("mode", SERIAL, MODE_OFF)]
        assert entity.hvac_action == HVACAction.OFF

    @pytest.mark.asyncio
    async def test_set_off_with_fan_service(
        self,
        client: FakeDeviceClient,
        fan_entity: FrigidaireClimateEntity,
        fan_accessory: FrigidaireAccessory,
    ) -> None:
        fan_accessory.cache.set("power", DevicePower.COOLING)
        await fan_entity.async_set_hvac_mode(HVACMode.OFF)
        assert client.writes == [("mode", SERIAL, MODE_OFF)]

    @pytest.mark.asyncio
    async def test_unsupported_hvac_mode_is_ignored(
        self, client: FakeDeviceClient, entity: FrigidaireClimateEntity
    ) -> None:
        await entity.async_set_hvac_mode(HVACMode.HEAT)
        assert client.writes == []

    @pytest.mark.asyncio
    async def test_preset_none_while_eco_switches_to_cool(
        self,
        client: FakeDeviceClient,
        entity: FrigidaireClimateEntity,
        accessory: FrigidaireAccessory,
    ) -> None:
        accessory.cache.set("power", DevicePower.ECO)
        await entity.async_set_preset_mode(PRESET_NONE)
        assert accessory.cache.get("target_mode") == TargetMode.COOL
        assert client.writes == [("mode", SERIAL, MODE_COOL)]


class TestFrigidaireClimateEntityFan:
    """Tests for fan modes."""

    def test_manual_fan_mode_from_speed(
        self, entity: FrigidaireClimateEntity, accessory: FrigidaireAccessory
    ) -> None:
        accessory.cache.set("fan_target_state", FanTargetState.MANUAL)
        accessory.cache.set("fan_speed", 66)
        assert entity.fan_mode == FAN_MEDIUM

    @pytest.mark.asyncio
    async def test_set_fan_mode_medium(
        self, client: FakeDeviceClient, entity: FrigidaireClimateEntity
    ) -> None:
        await entity.async_set_fan_mode(FAN_MEDIUM)
        assert client.writes == [("fan_mode", SERIAL, FANMODE_MED)]
        assert entity.fan_mode == FAN_MEDIUM

    @pytest.mark.asyncio
    async def test_set_fan_mode_auto(
        self,
        client: FakeDeviceClient,
        entity: FrigidaireClimateEntity,
        accessory: FrigidaireAccessory,
    ) -> None:
        accessory.cache.set("power", DevicePower.COOLING)
        accessory.cache.set("fan_target_state", FanTargetState.MANUAL)
        await entity.async_set_fan_mode(FAN_AUTO)
        assert client.writes == [("fan_mode", SERIAL, FANMODE_AUTO)]
        assert entity.fan_mode == FAN_AUTO

    @pytest.mark.asyncio
    async def test_set_fan_mode_auto_with_fan_service(
        self,
        client: FakeDeviceClient,
        fan_entity: FrigidaireClimateEntity,
        fan_accessory: FrigidaireAccessory,
    ) -> None:
        fan_accessory.cache.set("power", DevicePower.FAN_ONLY)
        fan_accessory.cache.set("fan_target_state", FanTargetState.MANUAL)
        await fan_entity.async_set_fan_mode(FAN_AUTO)
        assert client.writes == [("fan_mode", SERIAL, FANMODE_AUTO)]


class TestFrigidaireClimateEntityPush:
    """Tests for coordinator updates."""

    @pytest.mark.asyncio
    async def test_update_writes_state_while_added(
        self, entity: FrigidaireClimateEntity, accessory: FrigidaireAccessory
    ) -> None:
        entity.hass = Mock()
        entity.async_write_ha_state = Mock()

        await entity.async_added_to_hass()
        accessory.scheduler.async_update_listeners()
        entity.async_write_ha_state.assert_called_once()

        entity.add_to_platform_abort()
        accessory.scheduler.async_update_listeners()
        entity.async_write_ha_state.assert_called_once()

    @pytest.mark.asyncio
    async def test_refresh_writes_state_once(
        self,
        client: FakeDeviceClient,
        entity: FrigidaireClimateEntity,
        accessory: FrigidaireAccessory,
    ) -> None:
        entity.hass = Mock()
        entity.async_write_ha_state = Mock()
        await entity.async_added_to_hass()
        client.values.update(mode=MODE_COOL, fan_mode=FANMODE_MED, unit=CELSIUS)

        await accessory.scheduler.async_refresh()

        assert accessory.cache.get("power") == DevicePower.COOLING
        entity.async_write_ha_state.assert_called_once()

    @pytest.mark.asyncio
    async def test_command_writes_state_once(
        self,
        client: FakeDeviceClient,
        entity: FrigidaireClimateEntity,
    ) -> None:
        entity.hass = Mock()
        entity.async_write_ha_state = Mock()
        await entity.async_added_to_hass()

        await entity.async_set_hvac_mode(HVACMode.COOL)

        assert client.writes == [("mode", SERIAL, MODE_ECON)]
        entity.async_write_ha_state.assert_called_once()

    def test_unavailable_after_failed_refresh(
        self, entity: FrigidaireClimateEntity, accessory: FrigidaireAccessory
    ) -> None:
        assert entity.available is True
        accessory.scheduler.last_update_success = False
        assert entity.available is False
