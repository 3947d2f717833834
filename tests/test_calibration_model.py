import numpy as np
import pytest

from SpectroCamTool import (CalibrationModel, CalibrationModelFactory, GratingModel,
                            GratingSetupConfig, LinearModel, LinearSetupConfig,
                            PolynomialModel, PolynomialSetupConfig)


@pytest.fixture
def grating_model() -> GratingModel:
    return GratingModel(parameters=(0.30, 2.0, 0.5), lines_per_mm=500, sensor_pixels=640)


def test_linear_evaluates_and_inverts(linear_model):
    assert float(linear_model.wavelength(10)) == pytest.approx(400.0)
    assert float(linear_model.wavelength(90)) == pytest.approx(700.0)
    assert float(linear_model.pixel(550.0)) == pytest.approx(50.0)


def test_linear_rejects_wrong_parameter_count():
    with pytest.raises(ValueError):
        LinearModel(parameters=(1.0, 2.0, 3.0))


def test_with_parameters_returns_new_instance(linear_model):
    refit = linear_model.with_parameters([2.0, 100.0])
    assert refit.parameters == (2.0, 100.0)
    assert linear_model.parameters == (3.75, 362.5)
    assert isinstance(refit, LinearModel)


def test_models_are_frozen(linear_model):
    with pytest.raises(Exception):
        linear_model.parameters = (0.0, 0.0)


def test_polynomial_matches_polyval():
    model = PolynomialModel(parameters=(1e-3, 2.0, 380.0))
    pixels = np.array([0.0, 10.0, 250.0])
    np.testing.assert_allclose(model.wavelength(pixels), np.polyval([1e-3, 2.0, 380.0], pixels))
    assert model.degree == 2


def test_grating_inverse_round_trip(grating_model):
    wavelengths = np.array([405.0, 532.0, 589.0, 650.0])
    pixels = grating_model.pixel(wavelengths)
    assert np.all((pixels > 0) & (pixels < 640))
    np.testing.assert_allclose(grating_model.wavelength(pixels), wavelengths, rtol=1e-10)


def test_grating_decreases_with_pixel(grating_model):
    assert grating_model.is_monotonic(640)
    values = grating_model.wavelength(np.arange(640))
    assert values[0] > values[-1]


@pytest.mark.parametrize("model", [
    LinearModel(parameters=(3.75, 362.5)),
    PolynomialModel(parameters=(1e-4, 0.5, 400.0)),
    GratingModel(parameters=(0.30, 2.0, 0.5), lines_per_mm=500, sensor_pixels=640),
])
def test_analytic_jacobian_matches_finite_differences(model):
    pixels = np.array([12.0, 150.0, 320.0, 600.0])
    analytic = model.jacobian(pixels)
    numeric = CalibrationModel.jacobian(model, pixels)
    assert analytic.shape == (4, model.n_parameters)
    np.testing.assert_allclose(analytic, numeric, rtol=1e-4, atol=1e-2)


def test_non_monotonic_polynomial_is_detected():
    # Turning point at pixel 50
    model = PolynomialModel(parameters=(0.01, -1.0, 500.0))
    assert not model.is_monotonic(100)
    assert model.is_monotonic(40)


def test_factory_builds_grating_from_physical_setup():
    config = GratingSetupConfig(angle_deg=17.5, distance_to_sensor_mm=1.0,
                                sensor_width_mm=0.5, lines_per_mm=500, sensor_pixels=640)
    model = CalibrationModelFactory.create(config)
    assert isinstance(model, GratingModel)
    assert model.parameters[0] == pytest.approx(np.radians(17.5))
    assert model.parameters[1] == pytest.approx(2.0)
    assert model.parameters[2] == pytest.approx(0.5)
    assert model.is_monotonic(640)


def test_factory_builds_linear_and_polynomial_guesses():
    linear = CalibrationModelFactory.create(
        LinearSetupConfig(sensor_pixels=101, first_wavelength=400, last_wavelength=700))
    assert isinstance(linear, LinearModel)
    assert linear.slope == pytest.approx(3.0)
    assert linear.intercept == pytest.approx(400.0)

    poly = CalibrationModelFactory.create(PolynomialSetupConfig(sensor_pixels=101, degree=3))
    assert isinstance(poly, PolynomialModel)
    assert poly.parameters[:2] == (0.0, 0.0)
    assert float(poly.wavelength(100)) == pytest.approx(750.0)


def test_factory_restores_dumped_models(grating_model):
    restored = CalibrationModelFactory.restore(grating_model.model_dump())
    assert isinstance(restored, GratingModel)
    assert restored.parameters == grating_model.parameters
    assert restored.lines_per_mm == grating_model.lines_per_mm
    assert restored.sensor_pixels == grating_model.sensor_pixels


def test_factory_rejects_unknown_kinds():
    with pytest.raises(ValueError):
        CalibrationModelFactory.restore({"kind": "prism", "parameters": [1.0]})
    with pytest.raises(ValueError):
        CalibrationModelFactory.create(object())


def test_grating_seed_puts_optical_axis_at_camera_angle():
    config = GratingSetupConfig(sensor_pixels=640)
    model = CalibrationModelFactory.create(config)

    centre = config.axis_offset * config.sensor_pixels
    expected = model.line_spacing_nm * np.sin(np.radians(config.angle_deg))

    assert float(model.wavelength(centre)) == pytest.approx(expected)
    assert 380.0 < expected < 750.0
