# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# 3D spring force and integration kernels for the semi-implicit solver

import warp as wp


@wp.kernel
def eval_spring(
    x: wp.array(dtype=wp.vec3),
    v: wp.array(dtype=wp.vec3),
    spring_indices: wp.array(dtype=int),
    spring_rest_lengths: wp.array(dtype=float),
    spring_stiffness: wp.array(dtype=float),
    spring_damping: wp.array(dtype=float),
    min_length: float,
    f: wp.array(dtype=wp.vec3),
    spring_strains: wp.array(dtype=float),  # Output: raw strain
    spring_strains_normalized: wp.array(dtype=float),  # Output: normalized strain [-1, 1]
    strain_scale: float,
):
    """
    Evaluate damped spring forces (Hooke's law plus a velocity damper).

    Each thread processes one spring. The force on particle i is
    Fs + Fd and particle j receives the opposite.

        Fs = -ks * (|xij| - rest) * xij / |xij|
        Fd = -kd * dot(vij, n) / dot(n, n) * n

    where n is the direction of Fs, or the spring axis when Fs vanishes.
    """
    tid = wp.tid()

    i = spring_indices[tid * 2 + 0]
    j = spring_indices[tid * 2 + 1]

    ks = spring_stiffness[tid]
    kd = spring_damping[tid]
    rest = spring_rest_lengths[tid]

    xij = x[i] - x[j]
    vij = v[i] - v[j]

    l = wp.length(xij)

    # Coincident endpoints have no direction: no force
    if l < min_length:
        spring_strains[tid] = 0.0
        spring_strains_normalized[tid] = 0.0
        return

    dir = xij / l

    stretch = ks * (l - rest)
    fs = -stretch * dir

    n = dir
    if stretch != 0.0:
        n = wp.normalize(fs)
    fd = -kd * (wp.dot(vij, n) / wp.dot(n, n)) * n

    # Zero-rest-length springs report no strain
    raw_strain = float(0.0)
    if rest > min_length:
        raw_strain = (l - rest) / rest
    spring_strains[tid] = raw_strain
    spring_strains_normalized[tid] = wp.clamp(raw_strain / wp.max(strain_scale, 1e-8), -1.0, 1.0)

    wp.atomic_add(f, i, fs + fd)
    wp.atomic_sub(f, j, fs + fd)


@wp.kernel
def integrate_particles(
    x: wp.array(dtype=wp.vec3),
    v: wp.array(dtype=wp.vec3),
    f: wp.array(dtype=wp.vec3),
    inv_mass: wp.array(dtype=float),
    gravity: wp.vec3,
    dt: float,
    x_new: wp.array(dtype=wp.vec3),
    v_new: wp.array(dtype=wp.vec3),
):
    """
    Semi-implicit Euler update.

        v_{n+1} = v_n + (f_n / m + g) * dt
        x_{n+1} = x_n + v_{n+1} * dt

    Fixed particles (inverse mass 0) are copied through unchanged.
    """
    tid = wp.tid()

    x0 = x[tid]
    v0 = v[tid]
    inv_m = inv_mass[tid]

    if inv_m == 0.0:
        x_new[tid] = x0
        v_new[tid] = v0
        return

    v1 = v0 + (f[tid] * inv_m + gravity) * dt

    x_new[tid] = x0 + v1 * dt
    v_new[tid] = v1


# ============================================================================
# High-level wrapper functions
# ============================================================================

def eval_spring_forces(model, state, particle_f: wp.array):
    """
    Accumulate spring forces and strains for every spring of ``model``.

    Args:
        model: The Model containing spring properties
        state: The current State containing particle positions/velocities
        particle_f: Force accumulation array
    """
    if model.spring_count > 0:
        strain_scale = float(model.spring_strain_scale.numpy()[0])

        wp.launch(
            kernel=eval_spring,
            dim=model.spring_count,
            inputs=[
                state.particle_q,
                state.particle_qd,
                model.spring_indices,
                model.spring_rest_length,
                model.spring_stiffness,
                model.spring_damping,
                model.min_spring_length,
                particle_f,
                model.spring_strains,
                model.spring_strains_normalized,
                strain_scale,
            ],
            device=model.device,
        )
