from wheelview.physics.integrator import AngularPhysics
