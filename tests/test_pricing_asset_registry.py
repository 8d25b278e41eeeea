from __future__ import annotations

import unittest

from pool_valuation.domain.services.pricing_assets import PricingAssetRegistry

WETH = "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"
WBTC = "0x2260fac5e5542a773aa44fbcfedf7c193bc2c599"
USDC = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"
DAI = "0x6b175474e89094c44da98b954eedeac495271d0f"
OTHER = "0x00000000000000000000000000000000000000aa"


class PricingAssetRegistryTests(unittest.TestCase):
    def setUp(self):
        self.registry = PricingAssetRegistry.from_addresses(
            pricing_assets=[WETH, WBTC, USDC, DAI],
            usd_stable_assets=[USDC, DAI],
        )

    def test_membership_queries(self):
        self.assertTrue(self.registry.is_pricing_asset(WETH))
        self.assertFalse(self.registry.is_pricing_asset(OTHER))
        self.assertTrue(self.registry.is_usd_stable(DAI))
        self.assertFalse(self.registry.is_usd_stable(WETH))

    def test_membership_ignores_address_case(self):
        self.assertTrue(self.registry.is_pricing_asset(WETH.upper().replace("0X", "0x")))
        self.assertTrue(self.registry.is_usd_stable(" " + USDC + " "))

    def test_preferential_asset_follows_registry_order_not_candidate_order(self):
        self.assertEqual(self.registry.get_preferential_pricing_asset([DAI, OTHER, WBTC]), WBTC)
        self.assertEqual(self.registry.get_preferential_pricing_asset({USDC, DAI}), USDC)

    def test_preferential_asset_is_none_without_pricing_candidates(self):
        self.assertIsNone(self.registry.get_preferential_pricing_asset([OTHER]))
        self.assertIsNone(self.registry.get_preferential_pricing_asset([]))

    def test_primary_usd_stable_is_first_entry(self):
        self.assertEqual(self.registry.primary_usd_stable, USDC)

    def test_primary_usd_stable_requires_configuration(self):
        registry = PricingAssetRegistry.from_addresses(pricing_assets=[WETH], usd_stable_assets=[])
        with self.assertRaises(ValueError):
            _ = registry.primary_usd_stable


if __name__ == "__main__":
    unittest.main()
