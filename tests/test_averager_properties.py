"""Define property-based unit tests for the QuaternionAverager class.

Verifies that the average:
 - Recovers a single sample (up to sign).
 - Is unchanged when all weights are scaled uniformly.
 - Is independent of the order in which samples are added.
 - Is independent of the sign chosen for each sample.
 - Recovers the reference orientation from symmetric pairs of perturbations.
"""

from __future__ import annotations

import numpy as np
from hypothesis import given
from hypothesis import strategies as st
from transforms3d.quaternions import qmult

from quaternion_averager.averager import QuaternionAverager
from quaternion_averager.kinematics import UnitQuaternion

WeightedSamples = list[tuple[UnitQuaternion, float]]


@st.composite
def draw_unit_quaternion(draw: st.DrawFn) -> UnitQuaternion:
    """Generate a random unit quaternion with an arbitrary sign."""
    components = draw(
        st.lists(
            st.floats(min_value=-1.0, max_value=1.0, allow_nan=False, allow_infinity=False),
            min_size=4,
            max_size=4,
        ).filter(lambda c: np.linalg.norm(c) > 0.1),
    )
    return UnitQuaternion.from_array(np.array(components))


@st.composite
def draw_weight(draw: st.DrawFn) -> float:
    """Generate a strictly positive sample weight."""
    return draw(st.floats(min_value=0.1, max_value=10.0, allow_nan=False, allow_infinity=False))


@st.composite
def draw_clustered_samples(draw: st.DrawFn) -> WeightedSamples:
    """Generate weighted quaternions scattered around a common orientation.

    Samples stay within a bounded angle of the center so that the largest eigenvalue of the
    accumulated matrix is well separated from the others.
    """
    center = draw(draw_unit_quaternion())
    num_samples = draw(st.integers(min_value=1, max_value=12))

    samples: WeightedSamples = []
    for _ in range(num_samples):
        axis = draw(draw_unit_quaternion()).to_array()[1:]
        if np.linalg.norm(axis) < 1e-3:
            axis = np.array([0.0, 0.0, 1.0])
        angle_rad = draw(st.floats(min_value=-0.6, max_value=0.6))
        offset = UnitQuaternion.from_axis_angle(axis, angle_rad)

        sample = UnitQuaternion.from_array(qmult(center.to_array(), offset.to_array()))
        if draw(st.booleans()):
            sample = -sample
        samples.append((sample, draw(draw_weight())))

    return samples


def average_of(samples: WeightedSamples) -> UnitQuaternion:
    """Accumulate the given weighted samples (in order) and return their average."""
    averager = QuaternionAverager()
    for q, w in samples:
        averager.add_quaternion_weighted(q, w)
    return averager.calc_average()


@given(quat=draw_unit_quaternion(), weight=draw_weight())
def test_single_sample_is_its_own_average(quat: UnitQuaternion, weight: float) -> None:
    """Verify that the average of one sample is that sample (modulo negation)."""
    # Arrange/Act - Average a single weighted quaternion
    result = average_of([(quat, weight)])

    # Assert - Expect the same rotation back, as a unit quaternion
    assert result.approx_equal(quat, atol=1e-7)
    assert np.isclose(np.linalg.norm(result.to_array()), 1.0)


@given(samples=draw_clustered_samples(), scale=st.floats(min_value=0.01, max_value=100.0))
def test_uniform_weight_scaling_is_invariant(samples: WeightedSamples, scale: float) -> None:
    """Verify that multiplying every weight by the same factor leaves the average unchanged."""
    scaled_samples = [(q, scale * w) for q, w in samples]

    assert average_of(samples).approx_equal(average_of(scaled_samples), atol=1e-7)


@given(samples=draw_clustered_samples(), data=st.data())
def test_order_of_samples_is_irrelevant(samples: WeightedSamples, data: st.DataObject) -> None:
    """Verify that any permutation of the samples yields the same average."""
    permuted = data.draw(st.permutations(samples))

    assert average_of(samples).approx_equal(average_of(permuted), atol=1e-7)


@given(samples=draw_clustered_samples(), data=st.data())
def test_sample_signs_are_irrelevant(samples: WeightedSamples, data: st.DataObject) -> None:
    """Verify that negating any subset of samples yields the same average."""
    flips = data.draw(st.lists(st.booleans(), min_size=len(samples), max_size=len(samples)))
    flipped = [(-q if flip else q, w) for (q, w), flip in zip(samples, flips)]

    assert average_of(samples).approx_equal(average_of(flipped), atol=1e-7)


@given(
    reference=draw_unit_quaternion(),
    axis_quat=draw_unit_quaternion(),
    angle_rad=st.floats(min_value=0.01, max_value=1.2),
    weight=draw_weight(),
)
def test_symmetric_pair_averages_to_reference(
    reference: UnitQuaternion,
    axis_quat: UnitQuaternion,
    angle_rad: float,
    weight: float,
) -> None:
    """Verify that equal +/- rotations about one axis average to the reference orientation."""
    # Arrange - Perturb the reference by +angle and -angle about the same axis
    axis = axis_quat.to_array()[1:]
    if np.linalg.norm(axis) < 1e-3:
        axis = np.array([1.0, 0.0, 0.0])
    ref_array = reference.to_array()
    plus = qmult(ref_array, UnitQuaternion.from_axis_angle(axis, angle_rad).to_array())
    minus = qmult(ref_array, UnitQuaternion.from_axis_angle(axis, -angle_rad).to_array())
    samples = [
        (UnitQuaternion.from_array(plus), weight),
        (UnitQuaternion.from_array(minus), weight),
    ]

    # Act - Average the two equally weighted perturbations
    result = average_of(samples)

    # Assert - Expect the reference orientation (modulo negation)
    assert result.approx_equal(reference, atol=1e-7)
