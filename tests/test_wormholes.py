import unittest

from astral_surveyor.models.chunks import generate_chunk
from astral_surveyor.models.universe import GenerationContext
from astral_surveyor.models.wormholes import build_pair, pair_plan, partner_region


def find_plan(context):
    for rx in range(0, 64):
        for ry in range(0, 32):
            plan = pair_plan(context, rx, ry)
            if plan is not None:
                return plan
    return None


class TestPairing(unittest.TestCase):
    def test_partner_is_an_involution(self):
        ctx = GenerationContext(42)
        for rx in range(-40, 40, 3):
            for ry in range(-40, 40, 7):
                partner, is_alpha = partner_region(ctx, rx, ry)
                back, partner_is_alpha = partner_region(ctx, *partner)
                self.assertEqual(back, (rx, ry))
                self.assertNotEqual(is_alpha, partner_is_alpha)

    def test_both_sides_see_the_same_plan(self):
        ctx = GenerationContext(42)
        for rx in range(-10, 10):
            partner, _ = partner_region(ctx, rx, 4)
            self.assertEqual(pair_plan(ctx, rx, 4), pair_plan(ctx, *partner))

    def test_endpoints_link_across_chunks(self):
        ctx = GenerationContext(42)
        plan = find_plan(ctx)
        self.assertIsNotNone(plan)

        alpha_chunk = generate_chunk(ctx, *plan.alpha_chunk)
        beta_chunk = generate_chunk(ctx, *plan.beta_chunk)
        alpha = next(w for w in alpha_chunk.wormholes if w.designation == "alpha")
        beta = next(w for w in beta_chunk.wormholes if w.designation == "beta")

        self.assertEqual(alpha.wormhole_id, beta.wormhole_id)
        self.assertEqual((alpha.twin_x, alpha.twin_y), (beta.x, beta.y))
        self.assertEqual((beta.twin_x, beta.twin_y), (alpha.x, alpha.y))
        self.assertEqual(alpha.twin_key, beta.identity.key)
        self.assertEqual(beta.twin_key, alpha.identity.key)
        self.assertTrue(alpha.pair_id.endswith("-α"))
        self.assertTrue(beta.pair_id.endswith("-β"))

    def test_build_pair(self):
        alpha, beta = build_pair("WH-0001", (0.0, 0.0), (5000.0, -300.0), 40.0, 38.0)
        self.assertEqual(alpha.identity.key, "wormhole_0_0_alpha")
        self.assertEqual(beta.identity.key, "wormhole_5000_-300_beta")
        self.assertEqual(alpha.twin_key, beta.identity.key)
        self.assertEqual(alpha.discovery_distance - alpha.radius, beta.discovery_distance - beta.radius)
