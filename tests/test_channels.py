"""Tests for decay channel product rules and channel sampling."""

import pytest

from nuclidesim.core.channels import (
    ALPHA,
    ELECTRON,
    HEAVY_FRAGMENT,
    LIGHT_FRAGMENT,
    NEUTRON,
    POSITRON,
    TRITON,
    ChannelKind,
    apply_channel,
    channel_probability_sum,
    select_channel,
)


def _mass(particle):
    return particle[0] + particle[1]


def _charge(particle):
    # Bound or free electrons carry one negative charge each
    return particle[0] - particle[2]


class TestChannelKind:
    """Tests for the channel enumeration."""

    def test_closed_set(self):
        assert len(ChannelKind) == 24

    def test_from_symbol(self):
        assert ChannelKind.from_symbol("B-") is ChannelKind.BETA_MINUS
        assert ChannelKind.from_symbol("B+SF") is ChannelKind.BETA_PLUS_FISSION
        assert ChannelKind.from_symbol("EC") is ChannelKind.ELECTRON_CAPTURE

    def test_unknown_symbol(self):
        with pytest.raises(ValueError, match="Unknown decay channel"):
            ChannelKind.from_symbol("B--")

    def test_fission_kinds(self):
        fission = {k for k in ChannelKind if k.is_fission}
        assert fission == {
            ChannelKind.SPONTANEOUS_FISSION,
            ChannelKind.BETA_MINUS_FISSION,
            ChannelKind.BETA_PLUS_FISSION,
        }

    def test_every_kind_has_label(self):
        for kind in ChannelKind:
            assert kind.label


class TestApplyChannel:
    """Tests for the fixed (dZ, dN, dE) product rules."""

    def test_beta_minus(self):
        products = apply_channel(ChannelKind.BETA_MINUS, 6, 8)
        assert products.daughter == (7, 7, 0)
        assert products.emitted == [ELECTRON]

    def test_beta_plus(self):
        products = apply_channel(ChannelKind.BETA_PLUS, 6, 5)
        assert products.daughter == (5, 6, 0)
        assert products.emitted == [POSITRON]

    def test_alpha(self):
        products = apply_channel(ChannelKind.ALPHA, 92, 146)
        assert products.daughter == (90, 144, 0)
        assert products.emitted == [ALPHA]

    def test_multi_neutron_emitted_separately(self):
        products = apply_channel(ChannelKind.BETA_MINUS_TWO_NEUTRON, 3, 8)
        assert products.daughter == (4, 5, 0)
        assert products.emitted == [ELECTRON, NEUTRON, NEUTRON]

    def test_beta_minus_triton(self):
        products = apply_channel(ChannelKind.BETA_MINUS_TRITON, 2, 6)
        assert products.daughter == (2, 3, 0)
        assert products.emitted == [ELECTRON, TRITON]

    def test_electron_capture_needs_bound_electron(self):
        products = apply_channel(ChannelKind.ELECTRON_CAPTURE, 4, 3, e=0)
        assert products.daughter == (4, 3, 0)
        assert products.emitted == []

        products = apply_channel(ChannelKind.ELECTRON_CAPTURE, 4, 3, e=2)
        assert products.daughter == (3, 4, 1)

    def test_bound_beta_minus_keeps_electron(self):
        products = apply_channel(ChannelKind.BOUND_BETA_MINUS, 66, 97, e=0)
        assert products.daughter == (67, 96, 1)
        assert products.emitted == []

    def test_heavy_fission_fragment(self):
        products = apply_channel(ChannelKind.SPONTANEOUS_FISSION, 92, 146)
        assert products.emitted == [HEAVY_FRAGMENT]
        assert products.daughter == (78, 126, 0)

    def test_light_fission_fragment(self):
        products = apply_channel(ChannelKind.SPONTANEOUS_FISSION, 84, 128)
        assert products.emitted == [LIGHT_FRAGMENT]
        assert products.daughter == (78, 120, 0)

    def test_beta_delayed_fission(self):
        products = apply_channel(ChannelKind.BETA_MINUS_FISSION, 92, 146)
        assert products.daughter == (79, 125, 0)
        assert products.emitted == [HEAVY_FRAGMENT, ELECTRON]

    @pytest.mark.parametrize("kind", list(ChannelKind))
    def test_mass_and_charge_conserved(self, kind):
        """Every rule conserves nucleon number and electric charge."""
        parent = (60, 90, 1)
        products = apply_channel(kind, *parent)
        everything = [products.daughter] + products.emitted
        assert sum(_mass(p) for p in everything) == _mass(parent)
        assert sum(_charge(p) for p in everything) == _charge(parent)


class TestSelectChannel:
    """Tests for the cumulative-walk sampler."""

    CHANNELS = ((ChannelKind.BETA_MINUS, 0.6), (ChannelKind.ALPHA, 0.4))

    def test_zero_draw_selects_first(self):
        assert select_channel(self.CHANNELS, 0.0) is ChannelKind.BETA_MINUS

    def test_boundary_belongs_to_lower_channel(self):
        assert select_channel(self.CHANNELS, 0.6) is ChannelKind.BETA_MINUS

    def test_upper_channel(self):
        assert select_channel(self.CHANNELS, 0.61) is ChannelKind.ALPHA
        assert select_channel(self.CHANNELS, 0.999) is ChannelKind.ALPHA

    def test_short_sum_falls_back_to_last(self):
        channels = ((ChannelKind.ELECTRON_CAPTURE, 0.5),)
        assert select_channel(channels, 0.9) is ChannelKind.ELECTRON_CAPTURE

    def test_empty_set(self):
        with pytest.raises(ValueError):
            select_channel((), 0.5)

    def test_probability_sum(self):
        assert channel_probability_sum(self.CHANNELS) == pytest.approx(1.0)
        assert channel_probability_sum(()) == 0.0
