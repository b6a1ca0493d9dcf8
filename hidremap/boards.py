"""Pin and flash definitions of the supported RP2040/RP2350 boards."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Board:
    """Static hardware description of one board."""

    name: str
    gpio_valid_pins_base: int
    flash_size_bytes: int
    platform: str = "rp2040"
    pio_usb_dp_pin: Optional[int] = None
    pio_usb_vbusen_pin: Optional[int] = None
    pio_usb_vbusen_state: Optional[int] = None
    uart: Optional[int] = None
    uart_tx_pin: Optional[int] = None
    uart_rx_pin: Optional[int] = None
    led_pin: Optional[int] = None
    ws2812_pin: Optional[int] = None
    swdclk_pin: Optional[int] = None
    swdio_pin: Optional[int] = None
    serial_tx_pin: Optional[int] = None
    serial_rx_pin: Optional[int] = None
    serial_cts_pin: Optional[int] = None
    serial_rts_pin: Optional[int] = None
    i2c_block: Optional[str] = None
    i2c_sda_pin: Optional[int] = None
    i2c_scl_pin: Optional[int] = None
    i2c_enabled: bool = False
    mcp4651_enabled: bool = False
    adc_count: int = 0
    smps_mode_pin: Optional[int] = None
    spi_flash_port: Optional[str] = None
    spi_flash_pins: Optional[tuple[int, int, int, int]] = None  # cs, sck, mosi, miso
    flash_spi_clkdiv: int = 2
    xosc_startup_delay_multiplier: Optional[int] = None
    b0_supported: Optional[bool] = None
    a2_supported: Optional[bool] = None

    @property
    def adc_enabled(self) -> bool:
        return self.adc_count > 0

    def valid_pins(self) -> list[int]:
        """GPIO numbers usable as remapper inputs/outputs, in ascending order."""
        return [pin for pin in range(32) if (self.gpio_valid_pins_base >> pin) & 1]


_MIB = 1024 * 1024

_BOARDS: dict[str, Board] = {
    board.name: board
    for board in (
        Board(
            name="feather_host",
            gpio_valid_pins_base=0b00111111000000001101111111111111,
            flash_size_bytes=8 * _MIB,
            pio_usb_dp_pin=16,
            pio_usb_vbusen_pin=18,
            pio_usb_vbusen_state=1,
            uart=0,
            uart_tx_pin=0,
            uart_rx_pin=1,
            led_pin=13,
            ws2812_pin=21,
            xosc_startup_delay_multiplier=64,
            b0_supported=False,
        ),
        Board(
            name="flatbox_rev4",
            gpio_valid_pins_base=0b00111111110011111111111111111111,
            flash_size_bytes=16 * _MIB,
            pio_usb_dp_pin=20,
            b0_supported=True,
        ),
        Board(
            name="flatbox_rev8",
            gpio_valid_pins_base=0b00111111110011111111111111111111,
            flash_size_bytes=16 * _MIB,
            platform="rp2350",
            pio_usb_dp_pin=20,
            spi_flash_port="spi0",
            spi_flash_pins=(5, 6, 7, 4),
            a2_supported=True,
        ),
        Board(
            name="remapper",
            gpio_valid_pins_base=0b00000000001111110000111111111111,
            flash_size_bytes=1 * _MIB,
            swdclk_pin=28,
            swdio_pin=27,
            serial_tx_pin=24,
            serial_rx_pin=25,
            serial_cts_pin=26,
            serial_rts_pin=23,
            b0_supported=True,
        ),
        Board(
            name="remapper_v7",
            gpio_valid_pins_base=0b00000000000001110000110001111111,
            flash_size_bytes=1 * _MIB,
            swdclk_pin=28,
            swdio_pin=27,
            serial_tx_pin=24,
            serial_rx_pin=25,
            serial_cts_pin=26,
            serial_rts_pin=23,
            i2c_block="i2c0",
            i2c_sda_pin=8,
            i2c_scl_pin=9,
            i2c_enabled=True,
            mcp4651_enabled=True,
            b0_supported=True,
        ),
        Board(
            name="remapper_v8",
            gpio_valid_pins_base=0b00010000011111111111111111111111,
            flash_size_bytes=1 * _MIB,
            pio_usb_dp_pin=0,
            adc_count=2,
            smps_mode_pin=23,
            b0_supported=True,
        ),
        Board(
            name="waveshare_rp2040_pizero",
            gpio_valid_pins_base=0b00111111111111111111111111111111,
            flash_size_bytes=1 * _MIB,
            pio_usb_dp_pin=6,
            b0_supported=True,
        ),
        Board(
            name="waveshare_rp2350_usb_a",
            gpio_valid_pins_base=0b00111100000000000000011111111111,
            flash_size_bytes=2 * _MIB,
            platform="rp2350",
            pio_usb_dp_pin=12,
            uart=0,
            uart_tx_pin=0,
            uart_rx_pin=1,
            ws2812_pin=16,
            a2_supported=True,
        ),
    )
}


def get_board(name: str) -> Board:
    """Return the board with the given name; raise KeyError if unknown."""
    try:
        return _BOARDS[name]
    except KeyError:
        raise KeyError(f"unknown board: {name!r}") from None


def board_names() -> list[str]:
    """Names of all known boards, sorted."""
    return sorted(_BOARDS)