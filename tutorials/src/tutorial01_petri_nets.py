# %% [markdown]
# # PetriForge Tutorial 1: Building, Firing and Analyzing Petri Nets
#
# This tutorial introduces place/transition nets, their firing rule and the
# structural analysis based on circuits and handles.
#
# ## What you will learn
# In this tutorial you will learn how to:
#
# - build a Petri net and fire its transitions,
# - decompose a net into strongly connected components and circuits,
# - find handles and derive structural properties,
# - lay out a net on a canvas and draw it.
#
# ---
# ## 0. Setup

# %%
import petriforge
import matplotlib.pyplot as plt


# %% [markdown]
# ---
# ## 1. Places, transitions and tokens
#
# A Petri net is a directed bipartite graph. Places hold tokens; transitions
# move them. Arcs always connect a place with a transition. A transition is
# enabled if each of its input places holds at least as many tokens as the
# multiplicity of the connecting arc. Firing it removes those tokens and adds
# tokens to the output places.

# %%
net = petriforge.PetriNet(name='cycle')
p1, p2 = net.add_place(id='P1'), net.add_place(id='P2')
t1, t2 = net.add_transition(id='T1'), net.add_transition(id='T2')
net.connect(p1, t1)
net.connect(t1, p2)
net.connect(p2, t2)
net.connect(t2, p1)
net.add_token(p1)

print(net.summary())
print('fire T1:', net.fire(t1), net.marking)
print('fire T1 again:', net.fire(t1), net.marking)

# %% [markdown]
# Connecting two places raises a `ConnectionError`, and connecting an already
# connected pair increases the multiplicity of the existing arc:

# %%
arc, merged = net.connect(p2, t2)
print(arc, merged)

# %% [markdown]
# ---
# ## 2. Components and circuits
#
# A strongly connected component (SCC) is a maximal set of nodes that can all
# reach each other. An elementary circuit is a closed path without repeated
# nodes.

# %%
print(petriforge.get_strongly_connected_components(net, AS_IDS=True))
print(petriforge.find_elementary_circuits(net, AS_IDS=True))

# %% [markdown]
# ---
# ## 3. Handles and structural properties
#
# A handle of a circuit is a path that leaves the circuit and comes back to it.
# Handles from a transition to a place (TP) or from a place to a transition
# (PT) restrict the behavior of a strongly connected net.

# %%
p3 = net.add_place(id='P3')
t3 = net.add_transition(id='T3')
net.connect(t1, p3)
net.connect(p3, t3)
net.connect(t3, p1)

result = petriforge.analyze(net)
for handle in result.handles:
    print(handle, handle.handle_type)
print(result.report())

# %% [markdown]
# ---
# ## 4. Layout
#
# `ForceLayout` places the nodes with a spring-electrical simulation. The
# result holds the node positions; `plot_layout` draws them.

# %%
layout = petriforge.ForceLayout(400, 400, rng=0)
positions = layout.arrange(net)
print(positions)
petriforge.plot_layout(net, positions, show=False)
plt.show()
